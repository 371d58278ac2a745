"""Domain services.

Pure functions and single-use objects with no I/O: bind type selection
and predicate compilation.
"""

from slugstore.domain.services.predicate_compiler import (
    Binding,
    CompiledPredicate,
    PredicateCompiler,
    compile_predicate,
    template_placeholders,
)
from slugstore.domain.services.type_mapper import bind_type

__all__ = [
    "Binding",
    "CompiledPredicate",
    "PredicateCompiler",
    "compile_predicate",
    "template_placeholders",
    "bind_type",
]
