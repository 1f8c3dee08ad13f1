from typing import List

from paraphraser.llm.client import render_prompt
from paraphraser.pipeline.context import ParaphraseContext
from paraphraser.pipeline.stage import PipelineStage, StageError

VARIATION_SEPARATOR = "|||"
VARIATION_COUNT = 3


def split_variations(raw: str) -> List[str]:
    return [part.strip() for part in raw.split(VARIATION_SEPARATOR) if part.strip()]


class VariationsStage(PipelineStage):
    """
    Asks for three independent human-sounding rewrites of the input.
    """

    name = "variations"
    label = "stage-1"

    def execute(self, context: ParaphraseContext) -> None:
        raw = self.client.generate(
            render_prompt("variations.txt", text=context.text),
            stage=self.label,
        )

        variations = split_variations(raw)
        if len(variations) < VARIATION_COUNT:
            raise StageError("Gemini failed to generate 3 variations")

        context.variations = variations[:VARIATION_COUNT]
