#!/usr/bin/env python3
"""
Resolves ingredient lines from a text file against the master ingredient
vocabulary, creating new master ingredients where needed.
"""

import argparse
import dataclasses
import logging
import pathlib

from tqdm.auto import tqdm

from smart_cooking.config import Settings
from smart_cooking.database import DynamoDBHelper
from smart_cooking.exceptions import IngredientStoreError
from smart_cooking.ingredients import IngredientNormalizer, extract_ingredient_name

logger = logging.getLogger(__name__)


def read_lines(path: pathlib.Path):
    """Read non-empty, non-comment lines from ``path``."""
    with open(path, "r", encoding="utf-8") as f:
        return [
            line.strip()
            for line in f
            if line.strip() and not line.lstrip().startswith("#")
        ]


def main():
    """Save every ingredient line of a recipe file to the master vocabulary."""
    settings = Settings.from_env()

    parser_args = argparse.ArgumentParser(
        description="Save recipe ingredient lines to the master ingredient table"
    )
    parser_args.add_argument(
        "input_file",
        type=pathlib.Path,
        help="Text file with one ingredient line per row (e.g. '300g thịt gà')",
    )
    parser_args.add_argument(
        "--source-id",
        type=str,
        required=True,
        help="Id of the recipe the ingredient lines belong to",
    )
    parser_args.add_argument(
        "--table",
        type=str,
        default=settings.table_name,
        help=f"DynamoDB table name (default: {settings.table_name})",
    )
    parser_args.add_argument(
        "--endpoint-url",
        type=str,
        default=settings.endpoint_url,
        help="DynamoDB endpoint override, e.g. http://localhost:8000",
    )
    parser_args.add_argument(
        "--threshold",
        type=float,
        default=None,
        help="Similarity threshold for near-duplicates (default: 0.90)",
    )
    args = parser_args.parse_args()

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    settings = dataclasses.replace(
        settings, table_name=args.table, endpoint_url=args.endpoint_url
    )
    normalizer = IngredientNormalizer(DynamoDBHelper.from_settings(settings))
    if args.threshold is not None:
        normalizer.threshold = args.threshold

    lines = read_lines(args.input_file)
    if not lines:
        print(f"No ingredient lines found in {args.input_file}")
        exit(1)

    created = reused = failed = 0
    for line in tqdm(lines, desc="Saving ingredients"):
        name = extract_ingredient_name(line).name
        try:
            result = normalizer.save_ingredient(name, args.source_id)
        except IngredientStoreError as e:
            logger.error(f"Could not save {line!r}: {e}")
            failed += 1
            continue

        status = "new" if result.is_new else "existing"
        tqdm.write(f"{line} -> {result.id} ({status})")
        if result.is_new:
            created += 1
        else:
            reused += 1

    print(f"\nSummary:")
    print(f"  Lines processed: {len(lines)}")
    print(f"  New master ingredients: {created}")
    print(f"  Existing master ingredients: {reused}")
    print(f"  Failed: {failed}")


if __name__ == "__main__":
    main()
