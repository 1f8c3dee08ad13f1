import logging
import time
from typing import Iterator, List, Optional, Tuple

from paraphraser.config import DEFAULT_TONE
from paraphraser.llm.client import GeminiClient
from paraphraser.pipeline.context import ParaphraseContext
from paraphraser.pipeline.result import StageResult
from paraphraser.pipeline.stage import PipelineStage
from paraphraser.pipeline.variations_stage import VariationsStage
from paraphraser.pipeline.selection_stage import SelectionStage
from paraphraser.pipeline.refinement_stage import RefinementStage
from paraphraser.pipeline.tone_stage import ToneStage
from paraphraser.pipeline.burstiness_stage import BurstinessStage
from paraphraser.pipeline.quick_stage import StudentRewriteStage

logger = logging.getLogger(__name__)


class PipelineController:
    """
    Runs a fixed list of stages in order, each feeding the next through
    the shared context. Stops at the first failed stage. No retries.
    """

    def __init__(self, client: GeminiClient, stages: Optional[List[PipelineStage]] = None):
        self.client = client
        if stages is None:
            stages = [
                VariationsStage(client),
                SelectionStage(client),
                RefinementStage(client),
                ToneStage(client),
                BurstinessStage(client),
            ]
        self.stages = stages

    @classmethod
    def quick(cls, client: GeminiClient) -> "PipelineController":
        return cls(client, stages=[StudentRewriteStage(client)])

    def run(self, text: str, tone: str = DEFAULT_TONE) -> ParaphraseContext:
        context = ParaphraseContext(text=text, tone=tone)
        for _ in self.iter_run(context):
            pass
        return context

    def iter_run(
        self, context: ParaphraseContext
    ) -> Iterator[Tuple[PipelineStage, StageResult, int]]:
        """
        Yield (stage, result, progress) after every stage.

        progress is a percentage that never reaches 100 here; 100 is left
        for the caller's final answer.
        """
        total = len(self.stages)
        started_at = time.perf_counter()

        for position, stage in enumerate(self.stages, start=1):
            logger.info("Running stage %s (%d/%d)", stage.name, position, total)
            stage_started = time.perf_counter()

            result = stage.run(context)

            elapsed_ms = int((time.perf_counter() - stage_started) * 1000)
            progress = int(position * 100 / (total + 1))

            # Hard stop on failure
            if not result.is_valid:
                context.errors.extend(result.errors)
                logger.info("Stage %s failed after %d ms", stage.name, elapsed_ms)
                yield stage, result, progress
                return

            context.completed_stages.append(stage.name)
            logger.info("Stage %s complete in %d ms", stage.name, elapsed_ms)
            yield stage, result, progress

        logger.info(
            "Pipeline finished %d stages in %d ms",
            total,
            int((time.perf_counter() - started_at) * 1000),
        )
