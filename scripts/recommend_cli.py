"""CLI script for querying the shopping assistant offline.

Useful for trying out chat phrasing and search filters against a catalog
file without starting the API server.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from shopassist.config import Settings
from shopassist.recommender.assistant import respond
from shopassist.recommender.catalog import load_catalog
from shopassist.recommender.search import search_products, seasonal_recommendations

# Setup logging
logging.basicConfig(
    level=logging.WARNING,
    format="%(levelname)s: %(message)s"
)
logger = logging.getLogger(__name__)


def print_products(products, limit: int) -> None:
    for product in products[:limit]:
        print(
            f"  #{product['id']:<4} {product['name']:<40} "
            f"${product['price']:<9} rating {product['rating']}"
        )


def main() -> None:
    """Main CLI function."""
    parser = argparse.ArgumentParser(
        description="Query the shopping assistant from the command line",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/recommend_cli.py chat "warm jacket for winter"
  python scripts/recommend_cli.py search --q headphones --sort price-low
  python scripts/recommend_cli.py seasonal --json
        """
    )
    parser.add_argument(
        "--catalog",
        type=str,
        default=Settings.from_env().catalog_path,
        help="Path to the product catalog JSON (default: SHOPASSIST_CATALOG_PATH)"
    )
    parser.add_argument("--json", action="store_true", help="Print raw JSON output")
    parser.add_argument("--top-n", type=int, default=5, help="Products to print (default: 5)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable verbose logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    chat_parser = subparsers.add_parser("chat", help="Ask the assistant a question")
    chat_parser.add_argument("message", type=str)

    search_parser = subparsers.add_parser("search", help="Search with filters")
    search_parser.add_argument("--q", type=str, default=None)
    search_parser.add_argument("--category", type=str, default=None)
    search_parser.add_argument("--brand", type=str, default=None)
    search_parser.add_argument("--price-range", type=str, default=None)
    search_parser.add_argument("--min-rating", type=float, default=None)
    search_parser.add_argument(
        "--sort",
        type=str,
        choices=["price-low", "price-high", "rating", "reviews"],
        default=None,
    )

    subparsers.add_parser("seasonal", help="Top picks for the current season")

    args = parser.parse_args()

    if args.verbose:
        logging.getLogger().setLevel(logging.INFO)

    catalog = load_catalog(args.catalog)
    if catalog.is_empty:
        print(f"Error: No products loaded from {args.catalog}", file=sys.stderr)
        sys.exit(1)

    if args.command == "chat":
        result = respond(catalog, args.message)
    elif args.command == "search":
        result = search_products(
            catalog,
            q=args.q,
            category=args.category,
            price_range=args.price_range,
            brand=args.brand,
            sort=args.sort,
            min_rating=args.min_rating,
        )
    else:
        result = seasonal_recommendations(catalog)

    if args.json:
        print(json.dumps(result, indent=2, default=str))
        return

    if args.command == "chat":
        print(f"\n[{result['type']}] {result.get('name', '')} {result.get('price') or ''}")
        print(f"  {result.get('reason', result.get('message', ''))}")
        for alternative in result.get("alternatives", []):
            print(f"  also: {alternative['name']} ({alternative['price']})")
    elif args.command == "search":
        print(f"\n{result['total']} matching products:")
        print_products(result["results"], args.top_n)
    else:
        print(f"\n{result['message']}")
        print(f"  Tip: {result['weatherTip']}")
        print_products(result["recommendations"], args.top_n)

    print()


if __name__ == "__main__":
    main()
