"""Parse one Roam block and one Logseq block, zero config, zero deps."""

from notemark import Dialect, parse

print(parse("**Algorithm - Difference Engine** #roam/templates"))
print(parse("DONE water the [[plants]]", dialect=Dialect.LOGSEQ))
