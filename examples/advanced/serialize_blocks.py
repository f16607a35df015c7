"""Cache parsed blocks to disk as JSON."""

from notemark import parse
from notemark.serialization import from_json, to_json

expressions = parse("> Cached [[quote]] with a **bold** claim")

json_str = to_json(expressions)
restored = from_json(json_str)

print("Original == restored:", expressions == restored)
print("JSON length:", len(json_str), "chars")
