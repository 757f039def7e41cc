"""funcdb — function registry tooling for decompilation projects.

Loads, validates and rewrites the CSV function list that tracks every
function in the target binary (address, size, decompilation status, name),
and resolves functions by exact or demangled name.
"""

__version__ = "0.1.0"
