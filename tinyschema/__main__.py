"""
Validate a JSON document against a schema stored as JSON ::

    $ tinyschema person.schema.json person.json
    OK
    $ echo '{"name": 5}' | tinyschema person.schema.json
    'name': expected type 'string', got 'number'
"""
import argparse
import json
import logging
import sys

from tinyschema.schema import check_schema
from tinyschema.validators import DEFAULT_MAX_DEPTH, ValidationError, verify

logger = logging.getLogger("tinyschema")


def load(path):
    if path == "-":
        return json.load(sys.stdin)
    with open(path, encoding="utf-8") as fp:
        return json.load(fp)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="tinyschema",
        description="Validate a JSON document against a tinyschema schema.")
    parser.add_argument("schema", help="path to the JSON schema file")
    parser.add_argument("data", nargs="?", default="-",
                        help="path to the JSON document (default: stdin)")
    parser.add_argument("--no-strict", dest="strict", action="store_false",
                        help="allow object keys the schema does not mention")
    parser.add_argument("--max-depth", type=int, default=DEFAULT_MAX_DEPTH,
                        help="maximum nesting depth (default: %(default)s)")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="enable debug logging")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s")

    try:
        schema = load(args.schema)
        check_schema(schema, max_depth=args.max_depth)
    except (OSError, ValueError, RecursionError) as e:
        logger.error("cannot load schema %s: %s", args.schema, e)
        return 2
    except ValidationError as e:
        logger.error("invalid schema %s: %s", args.schema, e)
        return 2

    try:
        data = load(args.data)
    except (OSError, ValueError, RecursionError) as e:
        logger.error("cannot load document %s: %s", args.data, e)
        return 2

    try:
        verify(data, schema, strict=args.strict, max_depth=args.max_depth)
    except ValidationError as e:
        print(e, file=sys.stderr)
        return 1

    print("OK")
    return 0


if __name__ == "__main__":
    sys.exit(main())
