#!/usr/bin/env python3
"""
Script to seed the age ranges table used by the merge endpoint.

Usage:
    python populate_age_ranges.py                     # Table from AGE_RANGES_TABLE_NAME
    python populate_age_ranges.py --table AgeRanges-dev
    python populate_age_ranges.py --dry-run           # Print ranges only
"""

import argparse
import sys

from merge_api.config.table_names import get_table_name
from merge_api.data_access import AgeRangesRepository, DynamoDBClient, DynamoDBError
from merge_api.models.records import AgeRange

DEFAULT_AGE_RANGES = [
    AgeRange(id='range-bebe', range_name='Bebé', min_age=0, max_age=1),
    AgeRange(id='range-nino', range_name='Niño/a', min_age=2, max_age=12),
    AgeRange(id='range-adolescente', range_name='Adolescente', min_age=13, max_age=17),
    AgeRange(id='range-adulto', range_name='Adulto', min_age=18, max_age=64),
    AgeRange(id='range-anciano', range_name='Anciano', min_age=65, max_age=999),
]


def populate(repository: AgeRangesRepository, age_ranges=None) -> int:
    """
    Write age ranges to the table.

    Args:
        repository: Age ranges repository
        age_ranges: Ranges to write (default: DEFAULT_AGE_RANGES)

    Returns:
        Number of ranges written
    """
    age_ranges = DEFAULT_AGE_RANGES if age_ranges is None else age_ranges

    for age_range in age_ranges:
        repository.save_age_range(age_range)
        print(f"✓ {age_range.range_name} ({age_range.min_age}-{age_range.max_age})")

    return len(age_ranges)


def main():
    parser = argparse.ArgumentParser(
        description='Seed the age ranges table with the default ranges'
    )
    parser.add_argument(
        '--table',
        default=get_table_name('AGE_RANGES_TABLE_NAME'),
        help='Age ranges table name (default: AGE_RANGES_TABLE_NAME or AgeRanges)'
    )
    parser.add_argument(
        '--region',
        default='us-east-1',
        help='AWS region (default: us-east-1)'
    )
    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Print the ranges without writing them'
    )

    args = parser.parse_args()

    if args.dry_run:
        for age_range in DEFAULT_AGE_RANGES:
            print(f"  {age_range.range_name}: {age_range.min_age}-{age_range.max_age}")
        return

    print(f"Target table: {args.table}")
    repository = AgeRangesRepository(args.table, DynamoDBClient(region=args.region))

    try:
        written = populate(repository)
    except DynamoDBError as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(f"✓ {written} age ranges written")


if __name__ == '__main__':
    main()
