#!/usr/bin/env python3
"""
Run the policy query flow from the command line.
"""

import argparse
import json
import sys
from pathlib import Path

# Load environment variables from .env file first
import dotenv
dotenv.load_dotenv()

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from policy_search.core.collection import build_collection_client
from policy_search.core.flows import FlowRegistry, POLICY_QUERY_FLOW, register_policy_flows


def main():
    parser = argparse.ArgumentParser(description="Ask a policy question against the vector collection")
    parser.add_argument("query", help="Policy question or topic to search for")
    parser.add_argument("--json", action="store_true", help="Print the full response as JSON")
    args = parser.parse_args()

    registry = FlowRegistry()
    register_policy_flows(registry, build_collection_client())

    response = registry.run(POLICY_QUERY_FLOW, {"query": args.query})

    if args.json:
        print(json.dumps(response.model_dump(by_alias=True), indent=2))
    else:
        print(response.answer)
        if response.policy_types:
            print(f"\nPolicy types: {', '.join(response.policy_types)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
