"""Main entry point for generating a developer score badge.

Fetches a user's statistics and writes the SVG card (or the JSON snapshot)
to stdout or a file.
"""
import argparse
import asyncio
import json
import logging
import sys
from dotenv import load_dotenv
from devscore.application.stats_service import StatsService
from devscore.config import Settings
from devscore.domain.errors import NotFoundError, RateLimitError, UnavailableError
from devscore.domain.models import ComputeOptions, ScoringMode
from devscore.infrastructure.github_client import GitHubGateway
from devscore.rendering.svg import render_svg
from devscore.rendering.themes import get_theme, theme_names

# Load environment variables from .env or env file
load_dotenv('.env') or load_dotenv('env')


logger = logging.getLogger(__name__)

EXIT_NOT_FOUND = 2
EXIT_RATE_LIMITED = 3
EXIT_UNAVAILABLE = 4


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a GitHub developer score badge.")
    parser.add_argument("username", help="GitHub login")
    parser.add_argument("--theme", choices=theme_names(), help="Badge color theme")
    parser.add_argument("--format", choices=("svg", "json"), default="svg", dest="output_format")
    parser.add_argument("--mode", choices=[mode.value for mode in ScoringMode], help="Scoring mode")
    parser.add_argument("--no-avatar", action="store_true", help="Do not embed the avatar image")
    parser.add_argument("--no-streak", action="store_true", help="Skip the contribution streak")
    parser.add_argument("-o", "--output", help="Write to this file instead of stdout")
    return parser.parse_args(argv)


async def main(argv=None) -> int:
    """Compute the stats and write the badge."""
    settings = Settings.from_env()
    logging.basicConfig(
        level=settings.log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    args = parse_args(argv)

    options = ComputeOptions(
        include_avatar=not args.no_avatar,
        include_streak=not args.no_streak,
        mode=ScoringMode(args.mode) if args.mode else None,
    )

    service = StatsService(GitHubGateway(settings), mode=settings.scoring_mode)
    try:
        stats = await service.compute_stats(args.username, options)
    except NotFoundError:
        logger.error(f"GitHub user '{args.username}' not found")
        return EXIT_NOT_FOUND
    except RateLimitError:
        logger.error("GitHub API rate limit exceeded. Please try again later.")
        return EXIT_RATE_LIMITED
    except UnavailableError as e:
        logger.error(f"GitHub API is currently unavailable: {e}")
        return EXIT_UNAVAILABLE
    finally:
        await service.close()

    if args.output_format == "json":
        output = json.dumps(stats.to_dict(), indent=2, ensure_ascii=False)
    else:
        output = render_svg(stats, get_theme(args.theme or settings.default_theme))

    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(output)
        logger.info(f"Wrote {args.output_format} badge for {args.username} to {args.output}")
    else:
        sys.stdout.write(output + "\n")
    return 0


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
