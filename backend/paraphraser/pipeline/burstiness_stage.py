from paraphraser.llm.client import render_prompt
from paraphraser.pipeline.context import ParaphraseContext
from paraphraser.pipeline.stage import PipelineStage


class BurstinessStage(PipelineStage):
    """
    Last pass: raises sentence-length variation and word-choice
    unpredictability. Its output is the pipeline result.
    """

    name = "burstiness"
    label = "stage-5"

    def execute(self, context: ParaphraseContext) -> None:
        context.result = self.client.generate(
            render_prompt("burstiness.txt", tone=context.tone, text=context.toned),
            stage=self.label,
        )
