#!/usr/bin/env python3
"""
Demo script for the LiftLens response parsers.
Replays typical vision and routine model answers through the parsers,
without calling any model.
"""
from backend.engine.parsing.equipment import aggregate_equipment, merge_equipment
from backend.engine.parsing.routine import parse_routine
from backend.errors import UpstreamContentInvalidError


PHOTO_RESPONSES = [
    "- Treadmill\n- Dumbbells\n* Kettlebell",
    '["Squat Rack", "Barbell", "treadmill"]',
    "Bench\n\n• Dumbbells\nFoam roller",
]

ROUTINE_RESPONSE = """TITLE: Three-Day Strength Builder
DESCRIPTION: A full-body program built around compound lifts.
Suitable for intermediate lifters.
OUTLINE:
## Day 1: Lower Body
- Back Squat: 5 x 5
- Romanian Deadlift: 3 x 8



## Day 2: Upper Body
- Bench Press: 5 x 5
- Barbell Row: 3 x 8
"""

BROKEN_ROUTINE_RESPONSE = "# Strength Plan\nDESCRIPTION: Builds muscle.\nOUTLINE:\n"


def print_section(title: str):
    """Print a formatted section header."""
    print("\n" + "=" * 70)
    print(f"  {title}")
    print("=" * 70 + "\n")


def main():
    """Run the parser demo."""
    print_section("LiftLens Parser Demo")

    # STEP 1: Equipment detection across three photos
    print_section("STEP 1: Aggregate Equipment From Photo Answers")
    for index, response in enumerate(PHOTO_RESPONSES, start=1):
        print(f"Photo {index}: {response!r}")

    detected = aggregate_equipment(PHOTO_RESPONSES)
    print(f"\n✓ Detected {len(detected)} unique items:")
    for name in detected:
        print(f"  • {name}")

    # STEP 2: Merge into previously stored equipment
    print_section("STEP 2: Merge With Stored Equipment")
    stored = ["bench", "pull-up bar"]
    merged = merge_equipment(stored, detected)
    print(f"Stored:  {stored}")
    print(f"Merged:  {merged}")
    print(f"✓ Merging again changes nothing: {merge_equipment(merged, detected) == merged}")

    # STEP 3: Routine parsing
    print_section("STEP 3: Parse a Generated Routine")
    record = parse_routine(ROUTINE_RESPONSE)
    print(f"Title:       {record.title}")
    print(f"Description: {record.description}")
    print("Outline:")
    print(record.outline)

    # STEP 4: Routine that breaks the format
    print_section("STEP 4: Reject an Incomplete Routine")
    try:
        parse_routine(BROKEN_ROUTINE_RESPONSE)
    except UpstreamContentInvalidError as e:
        print(f"✓ Rejected: {e.message}")

    print("\n" + "=" * 70)
    print("  Demo Complete ✨")
    print("=" * 70 + "\n")


if __name__ == '__main__':
    main()
