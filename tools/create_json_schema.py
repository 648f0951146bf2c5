"""Print the JSON schema of the font metadata produced by `ttparse`.

This is the schema of `ttparse.data.Font`, which is what the `ttparse`
command prints (with `--cmap`, `--kerning` and `--bbox` filling in the
optional keys).  Run it after changing the TypedDicts in
`ttparse.data.metadata`.
"""

import json

from pydantic import TypeAdapter

import ttparse.data


def main():
    font_adapter = TypeAdapter(ttparse.data.Font)
    schema = font_adapter.json_schema()
    schema["title"] = "ttparse font metadata, version %s" % ttparse.data.VERSION
    print(json.dumps(schema, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
