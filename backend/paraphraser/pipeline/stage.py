import logging
from abc import ABC, abstractmethod

from paraphraser.llm.client import GeminiClient
from paraphraser.llm.errors import LLMError
from paraphraser.pipeline.context import ParaphraseContext
from paraphraser.pipeline.result import StageResult

logger = logging.getLogger(__name__)


class StageError(Exception):
    """A stage got an answer from the model it cannot use."""


class PipelineStage(ABC):
    name: str
    label: str

    def __init__(self, client: GeminiClient):
        self.client = client

    def run(self, context: ParaphraseContext) -> StageResult:
        """
        Run one LLM call against the context.

        Reads the previous stage's output from the context and writes its
        own output back. Never calls other stages.
        """
        try:
            self.execute(context)
        except (LLMError, StageError) as e:
            logger.error("Stage %s failed: %s", self.name, e)
            return StageResult.failure([str(e)])

        return StageResult.success()

    @abstractmethod
    def execute(self, context: ParaphraseContext) -> None:
        pass
