import argparse

def cmd_prompt(args: argparse.Namespace) -> None:
    """Print instructions for AI agents."""
    prompt = """# ulidgen - ULID Generator Guide

You are an AI agent using `ulidgen` to mint and inspect ULIDs (Universally Unique Lexicographically Sortable Identifiers).

## Core Rules
1. **Format**: 26 characters, Crockford base32 (`0-9A-HJKMNP-TV-Z`). First 10 chars are the millisecond timestamp, last 16 are randomness.
2. **Ordering**: ULIDs sort by creation time. Only `monotonic` guarantees strict order within the same millisecond.
3. **Seed time**: `--seed-time` takes Unix epoch milliseconds in [0, 2^48 - 1].
4. **Configuration**: Managed via `ulidgen.yaml` or `ULIDGEN_*` environment variables.

## Command Reference

### Generation
- `ulidgen standard`: One ULID for the current time.
- `ulidgen seeded --seed-time <ms>`: ULIDs sharing a timestamp, random (unordered) tails.
- `ulidgen monotonic --seed-time <ms> -n 5`: Strictly increasing ULIDs for the same timestamp.
  - *Example*: `ulidgen monotonic -n 3 --json`

### Inspection
- `ulidgen parse <ulid>`: Show the timestamp, date and fields of a ULID.
- `ulidgen parse <ulid> --strict-case`: Reject lower-case input.

### Setup
- `ulidgen init`: Create a default `ulidgen.yaml`.

## Typical Workflow for Agent
1. Need sortable IDs for a batch of records: `ulidgen monotonic -n <count>`
2. Need reproducible timestamps in fixtures: `ulidgen seeded --seed-time 1640995200000`
3. Need to know when an ID was minted: `ulidgen parse <ulid> --json`
"""
    print(prompt)
