"""
A tiny structural validator for decoded JSON. Schemas are written as plain
python data in the same shape as the documents they describe.
"""
from tinyschema.exceptions import TinySchemaError
from tinyschema.schema import check_schema
from tinyschema.validators import ValidationError, DEFAULT_MAX_DEPTH, \
    check, kind_of, type_name, verify
