"""registry - Function list model, CSV codec, loader, writer and lookups.

Re-exports the public names so that ``from funcdb.registry import X`` works
without knowing which submodule defines X.
"""

from funcdb.registry.loader import load_functions as load_functions
from funcdb.registry.loader import validate_functions as validate_functions
from funcdb.registry.lookup import demangle as demangle
from funcdb.registry.lookup import find_function_fuzzy as find_function_fuzzy
from funcdb.registry.lookup import make_known_function_map as make_known_function_map
from funcdb.registry.records import ADDRESS_BASE as ADDRESS_BASE
from funcdb.registry.records import CSV_HEADER as CSV_HEADER
from funcdb.registry.records import FunctionInfo as FunctionInfo
from funcdb.registry.records import Status as Status
from funcdb.registry.records import decode_record as decode_record
from funcdb.registry.records import encode_record as encode_record
from funcdb.registry.records import parse_address as parse_address
from funcdb.registry.records import parse_hex as parse_hex
from funcdb.registry.records import to_absolute as to_absolute
from funcdb.registry.records import to_relative as to_relative
from funcdb.registry.writer import format_functions as format_functions
from funcdb.registry.writer import write_functions as write_functions
