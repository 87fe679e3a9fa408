"""
Talent Matcher CLI - Command line interface for the matching engine.

Usage:
    python -m talent_matcher [command] [options]

Commands:
    command     Interpret a free-text command against a catalog
    match       Rank opportunities for a talent, or talents for an opportunity
    stats       Show availability statistics
    config      Manage configuration

Examples:
    python -m talent_matcher command "show me react developers" --catalog catalog.json
    python -m talent_matcher match --catalog catalog.json --talent "Fijula Rao"
    python -m talent_matcher stats --catalog catalog.json
    python -m talent_matcher config --set matching.mode ai_assisted
"""

import argparse
import json
import logging
import sys
from typing import Optional

from talent_matcher.core.errors import MatchingError
from talent_matcher.core.models import Intent, IntentAction, IntentFilters, ScoringMode
from talent_matcher.pipeline.results import CommandResult, ResultKind
from talent_matcher.utils.catalog_loader import load_catalog
from talent_matcher.utils.config import Config


def main(argv=None):
    """Main entry point for the CLI."""
    parser = argparse.ArgumentParser(
        description="Talent Matcher - Match talents and opportunities from free-text commands",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--config", help="Path to config file")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Command command
    command_parser = subparsers.add_parser("command", help="Run a free-text command")
    command_parser.add_argument("text", help="Command text, e.g. \"find qa opportunities\"")
    command_parser.add_argument("--catalog", "-c", required=True, help="Path to catalog file (JSON)")
    command_parser.add_argument("--ai", action="store_true", help="Use AI-assisted classification and scoring")
    command_parser.add_argument("--top", "-t", type=int, default=10, help="Show top N results")
    command_parser.add_argument("--json", action="store_true", help="Print the result as JSON")

    # Match command
    match_parser = subparsers.add_parser("match", help="Rank matches for a talent or an opportunity")
    match_parser.add_argument("--catalog", "-c", required=True, help="Path to catalog file (JSON)")
    target = match_parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--talent", help="Talent name (fuzzy)")
    target.add_argument("--opportunity", help="Opportunity title (fuzzy)")
    match_parser.add_argument("--ai", action="store_true", help="Use AI-assisted scoring")
    match_parser.add_argument("--top", "-t", type=int, default=10, help="Show top N matches")

    # Stats command
    stats_parser = subparsers.add_parser("stats", help="Show availability statistics")
    stats_parser.add_argument("--catalog", "-c", required=True, help="Path to catalog file (JSON)")

    # Config command
    config_parser = subparsers.add_parser("config", help="Manage configuration")
    config_parser.add_argument("--show", action="store_true", help="Show current config")
    config_parser.add_argument("--set", nargs=2, metavar=("KEY", "VALUE"), help="Set a config value")
    config_parser.add_argument("--set-api-key", nargs=2, metavar=("PROVIDER", "KEY"), help="Set API key")
    config_parser.add_argument("--init", action="store_true", help="Initialize default config")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        sys.exit(1)

    config = Config(args.config)

    try:
        if args.command == "command":
            cmd_command(args, config)
        elif args.command == "match":
            cmd_match(args, config)
        elif args.command == "stats":
            cmd_stats(args, config)
        elif args.command == "config":
            cmd_config(args, config)
        else:
            parser.print_help()

    except KeyboardInterrupt:
        print("\n\nOperation cancelled.")
        sys.exit(1)
    except Exception as e:
        print(f"\nError: {e}")
        sys.exit(1)


def _mode(args) -> Optional[ScoringMode]:
    return ScoringMode.AI_ASSISTED if getattr(args, "ai", False) else None


def print_result(result: CommandResult, top: int = 10) -> None:
    """Print a command result as a numbered list."""
    if not result.succeeded:
        print(f"❌ {result.message}")
        return

    print(f"\n✅ {result.message}\n")

    if result.kind is ResultKind.STATS:
        for key, value in result.stats.items():
            print(f"   {key.replace('_', ' ').title()}: {value}")
        return

    for i, match in enumerate(result.ranked[:top], 1):
        kind = "Talent" if match.talent is not None else "Opportunity"
        print(f"{i:2}. [{match.score:3}] {match.label} ({kind})")
        print(f"    {match.explanation}")


def cmd_command(args, config: Config):
    """Execute a free-text command."""
    catalog = load_catalog(args.catalog)
    pipeline = config.build_pipeline(_mode(args))

    print(f"🔍 Processing: {args.text}")
    result = pipeline.run_command(args.text, catalog)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2, default=str))
        return

    if result.intent is not None:
        print(f"   Intent: {result.intent.action.value} (via {result.intent.source})")
    print_result(result, args.top)


def cmd_match(args, config: Config):
    """Rank opportunities for a talent or talents for an opportunity."""
    catalog = load_catalog(args.catalog)
    pipeline = config.build_pipeline(_mode(args))

    if args.talent:
        intent = Intent(
            action=IntentAction.MATCH_TALENT_TO_OPPORTUNITY,
            filters=IntentFilters(talent_name=args.talent),
            source="cli",
        )
    else:
        intent = Intent(
            action=IntentAction.MATCH_OPPORTUNITY_TO_TALENTS,
            filters=IntentFilters(opportunity_title=args.opportunity),
            source="cli",
        )

    print("🎯 Matching...")
    try:
        result = pipeline.executor.execute(intent, catalog)
    except MatchingError as e:
        result = CommandResult.failure(e, intent=intent)
    print_result(result, args.top)


def cmd_stats(args, config: Config):
    """Show availability statistics."""
    catalog = load_catalog(args.catalog)
    pipeline = config.build_pipeline(ScoringMode.RULE_BASED)
    result = pipeline.executor.execute(Intent(action=IntentAction.SHOW_STATS, source="cli"), catalog)

    print("\n📊 Catalog Statistics")
    print_result(result)


def cmd_config(args, config: Config):
    """Execute config command."""
    if args.init:
        config.save()
        print(f"✅ Created config at: {config.config_path}")

    elif args.show:
        print("\n📋 Current Configuration\n")
        config.print_config()

    elif args.set:
        key, value = args.set
        # Try to parse as JSON for complex values
        try:
            value = json.loads(value)
        except json.JSONDecodeError:
            pass

        config.set(key, value)
        config.save()
        print(f"✅ Set {key} = {value}")

    elif args.set_api_key:
        provider, key = args.set_api_key
        config.set_api_key(provider, key)
        print(f"✅ Set API key for {provider}")

    else:
        print("Use --show, --set, --set-api-key, or --init")


if __name__ == "__main__":
    main()
