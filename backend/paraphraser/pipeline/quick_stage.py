from paraphraser.llm.client import render_prompt
from paraphraser.pipeline.context import ParaphraseContext
from paraphraser.pipeline.stage import PipelineStage


class StudentRewriteStage(PipelineStage):
    """Single-call paraphrase in a university student's voice."""

    name = "student_rewrite"
    label = "quick"

    def execute(self, context: ParaphraseContext) -> None:
        context.result = self.client.generate(
            render_prompt("student_rewrite.txt", text=context.text),
            stage=self.label,
        )
