import logging

from paraphraser.llm.client import render_prompt
from paraphraser.pipeline.context import ParaphraseContext
from paraphraser.pipeline.stage import PipelineStage

logger = logging.getLogger(__name__)

VALID_CHOICES = ("1", "2", "3")


def parse_choice(reply: str) -> int:
    """Zero-based index of the chosen variation; anything unexpected picks the first."""
    choice = reply.strip()
    if choice in VALID_CHOICES:
        return int(choice) - 1

    logger.warning("Unexpected selection reply %r, using variation 1", reply)
    return 0


class SelectionStage(PipelineStage):
    name = "selection"
    label = "stage-2"

    def execute(self, context: ParaphraseContext) -> None:
        first, second, third = context.variations
        reply = self.client.generate(
            render_prompt("selection.txt", first=first, second=second, third=third),
            stage=self.label,
        )

        index = parse_choice(reply)

        context.selected_index = index
        context.selected = context.variations[index]
