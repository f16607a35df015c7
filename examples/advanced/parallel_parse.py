"""Thread safe: parse 1000 blocks in parallel with one shared Parser."""

from concurrent.futures import ThreadPoolExecutor

from notemark import Parser

blocks = [f"TODO review [[Chapter {i}]] with ((ref-{i}))" for i in range(1000)]
parser = Parser(dialect="logseq")

with ThreadPoolExecutor(max_workers=8) as ex:
    results = list(ex.map(parser, blocks))

print(f"Parsed {len(results)} blocks in parallel")
print("First block:", results[0])
print("Last block:", results[-1])
