"""
Generate a curriculum from the command line.

Subscribes to the controller's status and curriculum streams, logs each
transition, and writes the final curriculum as JSON.

Usage:
    python scripts/generate_curriculum.py "Learn SQL basics" --skill Beginner --time Low
"""

import argparse
import asyncio
import logging
import os
import sys

# Add project root to path so we can import src
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.orchestrator.controller import CurriculumController
from src.schemas.base import PipelineStage, SkillLevel, TimeCommitment
from src.schemas.curriculum import Curriculum, UserPreferences
from src.schemas.status import AgentStatus
from src.utils.settings import PipelineSettings

logger = logging.getLogger("skillscout.cli")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a personalized curriculum")
    parser.add_argument("goal", help="What you want to learn")
    parser.add_argument(
        "--skill",
        choices=[level.value for level in SkillLevel],
        default=SkillLevel.BEGINNER.value,
    )
    parser.add_argument(
        "--time",
        choices=[name.capitalize() for name in TimeCommitment.__members__],
        default="Medium",
    )
    parser.add_argument("--output", "-o", help="Write the curriculum JSON here")
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser.parse_args(argv)


def log_status(status: AgentStatus) -> None:
    task = f" [{status.current_task}]" if status.current_task else ""
    logger.info(f"{status.stage.value:>9} {status.progress:3d}% {status.message}{task}")


def log_curriculum(curriculum: Curriculum | None) -> None:
    if curriculum is None:
        return
    curated = sum(1 for t in curriculum.iter_topics() if t.curated_content is not None)
    total = sum(1 for _ in curriculum.iter_topics())
    logger.info(f"Curriculum '{curriculum.title}': {curated}/{total} topics curated")


async def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    preferences = UserPreferences(
        goal=args.goal,
        skill_level=SkillLevel(args.skill),
        time_commitment=TimeCommitment(args.time),
    )

    controller = CurriculumController(settings=PipelineSettings.from_env())
    controller.subscribe_status(log_status)
    controller.subscribe_curriculum(log_curriculum)

    final = await controller.run(preferences)
    if final.stage != PipelineStage.COMPLETE or controller.curriculum is None:
        logger.error(final.message)
        return 1

    payload = controller.curriculum.model_dump_json(by_alias=True, indent=2)
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(payload)
        logger.info(f"Curriculum written to {args.output}")
    else:
        print(payload)
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
