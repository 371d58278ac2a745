"""Domain layer: predicate trees, identifiers and the query compiler."""
