from paraphraser.llm.client import render_prompt
from paraphraser.pipeline.context import ParaphraseContext
from paraphraser.pipeline.stage import PipelineStage


class ToneStage(PipelineStage):
    name = "tone"
    label = "stage-4"

    def execute(self, context: ParaphraseContext) -> None:
        context.toned = self.client.generate(
            render_prompt("tone.txt", tone=context.tone, text=context.refined),
            stage=self.label,
        )
