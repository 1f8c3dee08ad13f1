from paraphraser.llm.client import render_prompt
from paraphraser.pipeline.context import ParaphraseContext
from paraphraser.pipeline.stage import PipelineStage


class RefinementStage(PipelineStage):
    """Anti-detection rewrite of the selected variation."""

    name = "refinement"
    label = "stage-3"

    def execute(self, context: ParaphraseContext) -> None:
        context.refined = self.client.generate(
            render_prompt("refinement.txt", text=context.selected),
            stage=self.label,
        )
