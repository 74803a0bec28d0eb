#!/usr/bin/env python3
"""
Index policy documents from a JSON or JSON Lines file into the policies collection.
"""

import argparse
import sys
from pathlib import Path

# Load environment variables from .env file first
import dotenv
dotenv.load_dotenv()

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from policy_search.core.collection import build_collection_client
from policy_search.core.config import validate_config
from policy_search.core.loader import load_policy_file


def main():
    parser = argparse.ArgumentParser(
        description="Index policy documents into the vector collection",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s policies.json            # List of {text, metadata} objects
  %(prog)s policies.jsonl --clear   # Rebuild the collection from scratch

Environment variables:
- VECTOR_STORE_URL=http://localhost:8000 (Chroma server)
- COLLECTION_NAME=policies
- VECTOR_PROVIDER=chroma|memory
        """
    )
    parser.add_argument("path", help="JSON or JSONL file of policy documents")
    parser.add_argument("--clear", action="store_true", help="Clear the collection before indexing")
    args = parser.parse_args()

    issues = validate_config()
    if issues:
        for issue in issues:
            print(f"ERROR: {issue}")
        return 1

    try:
        items = load_policy_file(args.path)
    except ValueError as e:
        print(f"ERROR: {e}")
        return 1
    print(f"Loaded {len(items)} policy documents from {args.path}")

    client = build_collection_client()
    if args.clear:
        client.store.clear()
        print(f"✓ Cleared collection '{client.collection_name}'")

    indexed_ids = client.indexer.index_texts(items)
    print(f"✓ Indexed {len(indexed_ids)} documents into '{client.collection_name}'")

    skipped = len(items) - len(indexed_ids)
    if skipped:
        print(f"WARNING: Skipped {skipped} documents without text")
    return 0


if __name__ == "__main__":
    sys.exit(main())
