#!/usr/bin/env python3
"""Resolve and search farm records through the Farm Lookup API."""

import argparse
import json
import os
import sys
import urllib.error
import urllib.parse
import urllib.request

FARM_LOOKUP_API = os.environ.get("FARM_LOOKUP_API", "http://localhost:8000")


def _get(path: str, params: dict = None) -> dict:
    url = f"{FARM_LOOKUP_API}{path}"
    if params:
        query = {k: v for k, v in params.items() if v not in (None, "")}
        if query:
            url += "?" + urllib.parse.urlencode(query)
    req = urllib.request.Request(url, method="GET")
    with urllib.request.urlopen(req, timeout=10) as resp:
        return json.loads(resp.read().decode("utf-8"))


def resolve(collection: str, identifier: str) -> dict:
    """Resolve an identifier to one record."""
    segment = urllib.parse.quote(identifier, safe="")
    return _get(f"/resolve/{collection}/{segment}")


def search(query: str, type_filter: str = "all", category: str = None, limit: int = None) -> dict:
    """Cross-entity search."""
    return _get("/search", {"q": query, "type": type_filter, "category": category, "limit": limit})


def format_suggestion(suggestion: dict) -> str:
    """Format a single suggestion for display."""
    line = f"  [{suggestion.get('type', '')}] {suggestion.get('title', '')}"
    subtitle = suggestion.get("subtitle")
    if subtitle:
        line += f"  ({subtitle})"
    return line


def main():
    parser = argparse.ArgumentParser(description="Resolve or search farm records")
    sub = parser.add_subparsers(dest="command", required=True)

    p_resolve = sub.add_parser("resolve", help="Resolve a slug, name or id")
    p_resolve.add_argument("collection", choices=["equipment", "buildings", "locations"])
    p_resolve.add_argument("identifier")

    p_search = sub.add_parser("search", help="Search equipment and maintenance logs")
    p_search.add_argument("query", nargs="+")
    p_search.add_argument("--type", "-t", dest="type_filter", default="all",
                          choices=["all", "equipment", "maintenance"])
    p_search.add_argument("--category", "-c", help="Equipment category filter")
    p_search.add_argument("--limit", "-l", type=int, help="Max results per collection")

    args = parser.parse_args()

    try:
        if args.command == "resolve":
            record = resolve(args.collection, args.identifier)
            print(f"{record['title']}  ({record['collection']}, via {record['stage']})")
            print(f"  id:   {record['id']}")
            print(f"  slug: {record['slug']}")
            return

        result = search(" ".join(args.query), args.type_filter, args.category, args.limit)
        results = result.get("results", [])
        if not results:
            print("(no matches)")
            return
        print(f"=== {len(results)} result(s) ===")
        for suggestion in results:
            print(format_suggestion(suggestion))
        categories = result.get("categories", [])
        if categories:
            print(f"\nCategories: {', '.join(categories)}")

    except urllib.error.HTTPError as e:
        if e.code == 404:
            print(f"✗ Not found: {args.identifier if args.command == 'resolve' else ''}", file=sys.stderr)
        else:
            print(f"✗ API error {e.code}: {e.reason}", file=sys.stderr)
        sys.exit(1)
    except urllib.error.URLError:
        print(f"✗ Cannot reach Farm Lookup API ({FARM_LOOKUP_API})", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
