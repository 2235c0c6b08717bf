"""
Core value types, numerical primitives, and contracts.

- core.math      : tolerances and stable scalar comparisons
- core.linalg    : fixed-size Vector / Matrix and operator dispatch
- core.contracts : JSON documents and JSON Schema validation
"""
