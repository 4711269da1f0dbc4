"""
`categories` subcommand: list categories with question counts and their aliases.
"""

from typing import Dict, List

from ..services.render_service import bar
from .common import add_db_argument, open_existing_store, rule


def add_parser(subparsers) -> None:
    parser = subparsers.add_parser(
        'categories',
        help='List all categories with question counts',
        description='List all categories with question counts',
    )
    add_db_argument(parser)
    parser.set_defaults(handler=run)


def run(args) -> int:
    store = open_existing_store(args.db)
    if store is None:
        return 1

    try:
        categories = store.all_categories()
        aliases = store.all_aliases()
    finally:
        store.close()

    total = sum(c.count for c in categories)
    print(rule(60))
    print(f"  Categories ({len(categories)} total, {total} questions)")
    print(rule(60))

    width = max([len(c.name) for c in categories] + [8])
    for cat in categories:
        if cat.count == 0:
            continue
        pct = cat.count / total * 100 if total > 0 else 0.0
        print(f"  {cat.name.ljust(width)}  {cat.pic[:22].ljust(22)}  {cat.count:4d}  ({pct:5.1f}%)  {bar(pct)}")

    if aliases:
        print("")
        print(rule(60))
        print(f"  Aliases ({len(aliases)} mappings)")
        print(rule(60))

        grouped: Dict[str, List[str]] = {}
        for a in aliases:
            grouped.setdefault(a.canonical, []).append(a.alias)
        for canonical in sorted(grouped):
            print(f"  {canonical}: {', '.join(grouped[canonical])}")
    return 0
