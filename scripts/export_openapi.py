"""Write the API's OpenAPI document as JSON.

Usage:
    python scripts/export_openapi.py --out openapi.json
    python scripts/export_openapi.py            # print to stdout
"""

import argparse
import json
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from api.main import app  # noqa: E402


def main():
    parser = argparse.ArgumentParser(description="Export the OpenAPI schema")
    parser.add_argument("--out", help="Output file (default: stdout)")
    args = parser.parse_args()

    schema = json.dumps(app.openapi(), ensure_ascii=False, indent=2)
    if args.out:
        Path(args.out).write_text(schema + "\n", encoding="utf-8")
    else:
        print(schema)


if __name__ == "__main__":
    main()
