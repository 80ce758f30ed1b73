"""
Helpers for reading the shape of a schema node, plus :func:`check_schema`
which walks a whole schema looking for authoring mistakes.

A schema is written as plain python data, usually the result of
:func:`json.loads` or a literal in your code::

    >>> person = {
    ...     "name": "string",
    ...     "age?": "integer",
    ...     "tags": ["string", "*"],
    ...     "role": ["enum", "admin", "user"],
    ...     "_strict": False
    ... }

:func:`tinyschema.verify` only looks at the parts of a schema the data
actually reaches, so a typo hiding in an ``or`` branch may go unnoticed for
a long time. Run :func:`check_schema` once on static schemas to catch those
early ::

    >>> check_schema({"id": ["or", "integer", "strnig"]})
    Traceback (most recent call last):
        ...
    ValidationError: 'id': invalid schema type: 'strnig'
"""
from collections.abc import Mapping

ANY_KEY = "_any"
STRICT_KEY = "_strict"
RESERVED_KEYS = (ANY_KEY, STRICT_KEY)

OPTIONAL_SUFFIX = "?"
REPEAT_MARKERS = ("+", "*")

SCALAR_TAGS = ("string", "number", "boolean", "integer", "array",
               "object", "any")

ENUM = "enum"
OR = "or"

DEFAULT_MAX_DEPTH = 200


def is_sequence(obj):
    return isinstance(obj, (list, tuple))


def is_mapping(obj):
    return isinstance(obj, Mapping)


def array_form(schema):
    """
    Classify a sequence schema as ``"enum"``, ``"or"`` or ``"array"``.
    """
    if len(schema) and isinstance(schema[0], str) and schema[0] in (ENUM, OR):
        return schema[0]
    return "array"


def child_path(path, key):
    return "{0}.{1}".format(path, key) if path else str(key)


def is_optional(key):
    return key.endswith(OPTIONAL_SUFFIX)


def required_keys(schema):
    return [k for k in schema
            if k not in RESERVED_KEYS and not is_optional(k)]


def field_schema(schema, key):
    """
    Find the schema for data key ``key``. A bare schema key wins over its
    ``?`` form, which wins over ``_any``. Raises :class:`KeyError` if
    nothing covers the key.
    """
    if key not in RESERVED_KEYS:
        if key in schema:
            return schema[key]
        if isinstance(key, str) and key + OPTIONAL_SUFFIX in schema:
            return schema[key + OPTIONAL_SUFFIX]
    any_schema = schema.get(ANY_KEY)
    if any_schema is None:
        raise KeyError(key)
    return any_schema


def object_schema_error(schema, path):
    """
    Return a ``ValidationError`` if the object schema itself is malformed,
    otherwise ``None``.
    """
    from tinyschema.validators import ValidationError

    for key in schema:
        if is_optional(key) and key[:-1] in schema:
            return ValidationError(
                "'{0}': conflicting schema keys '{1}' and '{2}'".format(
                    child_path(path, key[:-1]), key[:-1], key),
                reason_code="invalid_schema", path=child_path(path, key[:-1]))

    strict = schema.get(STRICT_KEY)
    if strict is not None and not isinstance(strict, bool):
        return ValidationError(
            "'{0}': invalid schema value for '{1}': '{2}'".format(
                path, STRICT_KEY, strict),
            reason_code="invalid_schema", path=path)
    return None


def check_schema(schema, path="", max_depth=DEFAULT_MAX_DEPTH):
    """
    Walk every branch of ``schema`` and raise a
    :class:`~tinyschema.validators.ValidationError` with reason code
    ``invalid_schema`` on the first authoring error found. Enum members are
    literal values and are not inspected.

    Schemas nested deeper than ``max_depth`` (cyclic ones included) fail
    with reason code ``max_depth_exceeded``.
    """
    _walk(schema, path or "", 0, max_depth)


def _walk(schema, path, depth, max_depth):
    from tinyschema.validators import ValidationError, render

    if depth > max_depth:
        raise ValidationError(
            "'{0}': maximum nesting depth of {1} exceeded".format(
                path, max_depth),
            reason_code="max_depth_exceeded", path=path)

    if is_sequence(schema):
        form = array_form(schema)
        if form == ENUM:
            return
        nodes = schema[1:] if form == OR else schema
        for i, node in enumerate(nodes):
            if form == "array" and node in REPEAT_MARKERS \
                    and i == len(nodes) - 1 and len(nodes) > 1:
                continue
            _walk(node, path if form == OR else "{0}[{1}]".format(path, i),
                  depth + 1, max_depth)
    elif is_mapping(schema):
        err = object_schema_error(schema, path)
        if err is not None:
            raise err
        for key, node in schema.items():
            if key == STRICT_KEY:
                continue
            if key == ANY_KEY:
                if node is not None:
                    _walk(node, child_path(path, key), depth + 1, max_depth)
                continue
            name = key[:-1] if is_optional(key) else key
            _walk(node, child_path(path, name), depth + 1, max_depth)
    elif not (isinstance(schema, str) and schema in SCALAR_TAGS):
        raise ValidationError(
            "'{0}': invalid schema type: '{1}'".format(path, render(schema)),
            reason_code="invalid_schema", path=path)
