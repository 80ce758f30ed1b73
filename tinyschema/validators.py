"""
The validation engine. :func:`verify` checks an already decoded python
value (usually the result of :func:`json.loads`) against a schema written
in the same shape as the data::

    >>> from tinyschema import verify
    >>> verify({"name": "shawn", "tags": ["a", "b"]},
    ...        {"name": "string", "tags": ["string", "*"]})

Nothing is returned when the value conforms. The first violation found
raises a :class:`ValidationError` whose message names the offending
location ::

    >>> verify({"a": {"b": "x"}}, {"a": {"b": "integer"}})
    Traceback (most recent call last):
        ...
    ValidationError: 'a.b': expected type 'integer', got 'string'

If you would rather not deal with exceptions use :func:`check`, which
returns the error instead of raising it.
"""
import logging

from tinyschema.exceptions import TinySchemaError
from tinyschema.schema import DEFAULT_MAX_DEPTH, ENUM, OR, \
    REPEAT_MARKERS, SCALAR_TAGS, STRICT_KEY, array_form, child_path, \
    field_schema, is_mapping, is_sequence, object_schema_error, \
    required_keys

logger = logging.getLogger(__name__)


class _Undefined(object):
    """ Stands in for an array position the data does not have. """
    def __repr__(self):
        return "undefined"


UNDEFINED = _Undefined()


class ValidationError(TinySchemaError):
    """
    Raised from :func:`verify` when a value does not conform to its schema,
    or when the schema itself is malformed.
    """
    def __init__(self, reason, reason_code=None, path="", **extras):
        """
        :param reason: A nice message describing what was not valid
        :param reason_code: programmatic friendly reason code
        :param path: Location of the offending value, e.g. ``a.b[2]``
        :param extras: Any extra info about the error you want to convey
        """
        TinySchemaError.__init__(self, reason, **extras)
        self.reason_code = reason_code
        self.path = path

    def to_json(self):
        obj = {"reason": str(self), "path": self.path}
        obj.update(self.extras)

        if self.reason_code:
            obj["reason_code"] = self.reason_code

        return obj


def kind_of(value):
    """
    Name the runtime kind of ``value`` the way error messages report it ::

        >>> kind_of(True), kind_of(1.5), kind_of([]), kind_of(None)
        ('boolean', 'number', 'array', 'null')
    """
    if value is UNDEFINED:
        return "undefined"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if is_sequence(value):
        return "array"
    if is_mapping(value):
        return "object"
    return value.__class__.__name__


def render(value):
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def type_name(schema):
    """
    Render a schema node as a readable type label. Invalid scalar tags are
    returned verbatim ::

        >>> type_name(["or", "string", {"n": "number"}])
        'string | object'
        >>> type_name(["enum", "red", "blue"])
        'enum(red, blue)'
    """
    if is_sequence(schema):
        form = array_form(schema)
        if form == ENUM:
            return "enum({0})".format(", ".join(render(v) for v in schema[1:]))
        if form == OR:
            return " | ".join(type_name(s) for s in schema[1:])
        return "array"
    if is_mapping(schema):
        return "object"
    return render(schema)


def index_path(path, i):
    return "{0}[{1}]".format(path, i)


def _type_error(path, expected, got, reason_code="type_mismatch"):
    return ValidationError(
        "'{0}': expected type '{1}', got '{2}'".format(path, expected, got),
        reason_code=reason_code, path=path)


def _too_few(path):
    return ValidationError("'{0}': array has too few elements".format(path),
                           reason_code="too_few_elements", path=path)


def _is_integer(value):
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and value.is_integer()


def _same(a, b):
    return kind_of(a) == kind_of(b) and a == b


def _check_enum(value, schema, path):
    if any(_same(value, allowed) for allowed in schema[1:]):
        return None
    return _type_error(path, type_name(schema), render(value),
                       reason_code="enum_mismatch")


def _check_or(value, schema, path, strict, depth, max_depth):
    for alt in schema[1:]:
        err = _check(value, alt, path, strict, depth + 1, max_depth)
        if err is None:
            return None
        if err.reason_code == "max_depth_exceeded":
            return err
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("'%s': alternative '%s' rejected: %s",
                         path, type_name(alt), err)
    return _type_error(path, type_name(schema), kind_of(value),
                       reason_code="union_mismatch")


def _check_object(value, schema, path, strict, depth, max_depth):
    err = object_schema_error(schema, path)
    if err is not None:
        return err

    for key in required_keys(schema):
        if key not in value:
            key_path = child_path(path, key)
            return ValidationError(
                "'{0}': missing required key".format(key_path),
                reason_code="missing_required_key", path=key_path)

    own_strict = schema.get(STRICT_KEY)
    if own_strict is None:
        own_strict = strict

    for key, item in value.items():
        key_path = child_path(path, key)
        try:
            sub_schema = field_schema(schema, key)
        except KeyError:
            if own_strict:
                return ValidationError(
                    "'{0}': unrecognized key".format(key_path),
                    reason_code="unrecognized_key", path=key_path)
            continue
        err = _check(item, sub_schema, key_path, strict, depth + 1, max_depth)
        if err is not None:
            return err
    return None


def _check_array(value, schema, path, strict, depth, max_depth):
    size, length = len(schema), len(value)

    if size == 0:
        if length:
            return ValidationError(
                "'{0}': expected empty array".format(path),
                reason_code="expected_empty_array", path=path)
        return None

    if size == 1:
        # Only position 0 is checked, the length is not.
        first = value[0] if length else UNDEFINED
        return _check(first, schema[0], index_path(path, 0), strict,
                      depth + 1, max_depth)

    offset = size - 2
    if length < offset:
        return _too_few(path)

    for i in range(offset):
        err = _check(value[i], schema[i], index_path(path, i), strict,
                     depth + 1, max_depth)
        if err is not None:
            return err

    marker = schema[offset + 1]
    if isinstance(marker, str) and marker in REPEAT_MARKERS:
        if marker == "+" and length == offset:
            return _too_few(path)
        for i in range(offset, length):
            err = _check(value[i], schema[offset], index_path(path, i),
                         strict, depth + 1, max_depth)
            if err is not None:
                return err
        return None

    if length < size:
        return _too_few(path)
    if length > size:
        return ValidationError(
            "'{0}': array has an invalid number of elements".format(path),
            reason_code="invalid_number_of_elements", path=path)

    for i in (offset, offset + 1):
        err = _check(value[i], schema[i], index_path(path, i), strict,
                     depth + 1, max_depth)
        if err is not None:
            return err
    return None


def _check(value, schema, path, strict, depth, max_depth):
    if depth > max_depth:
        logger.debug("'%s': nesting depth limit %d reached", path, max_depth)
        return ValidationError(
            "'{0}': maximum nesting depth of {1} exceeded".format(
                path, max_depth),
            reason_code="max_depth_exceeded", path=path)

    if is_sequence(schema):
        form = array_form(schema)
        if form == ENUM:
            return _check_enum(value, schema, path)
        if form == OR:
            return _check_or(value, schema, path, strict, depth, max_depth)
        if not is_sequence(value):
            return _type_error(path, "array", kind_of(value))
        return _check_array(value, schema, path, strict, depth, max_depth)

    if is_mapping(schema):
        if not is_mapping(value):
            return _type_error(path, "object", kind_of(value))
        return _check_object(value, schema, path, strict, depth, max_depth)

    if isinstance(schema, str) and schema in SCALAR_TAGS:
        return _check_tag(value, schema, path)
    return ValidationError(
        "'{0}': invalid schema type: '{1}'".format(path, render(schema)),
        reason_code="invalid_schema", path=path)


def _check_tag(value, tag, path):
    if tag in ("string", "boolean", "number", "object"):
        if kind_of(value) != tag:
            return _type_error(path, tag, kind_of(value))
    elif tag == "integer":
        if not _is_integer(value):
            return _type_error(path, tag, kind_of(value))
    elif tag == "array":
        if not is_sequence(value):
            return _type_error(path, tag, kind_of(value))
    return None


def check(value, schema, path="", strict=True, max_depth=DEFAULT_MAX_DEPTH):
    """
    Same as :func:`verify` but returns the :class:`ValidationError` instead
    of raising it. Returns ``None`` when ``value`` conforms.
    """
    return _check(value, schema, path or "", strict, 0, max_depth)


def verify(value, schema, path="", strict=True, max_depth=DEFAULT_MAX_DEPTH):
    """
    Validate ``value`` against ``schema``.

    :param value: Decoded data to check.
    :param schema: A scalar tag, object schema or array schema.
    :param path: Prefix used in error messages, empty at the root.
    :param strict: Reject object keys the schema does not account for.
        An object schema's ``_strict`` key overrides this for its own keys.
    :param max_depth: How deep to descend before giving up with a
        ``max_depth_exceeded`` error.
    :raises ValidationError: on the first violation found.
    """
    err = check(value, schema, path, strict, max_depth)
    if err is not None:
        raise err
