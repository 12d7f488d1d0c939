"""Unit tests for the generation pipeline."""

from pathlib import Path

import pytest

from wfdocs.config import CIConfig, PathsConfig, WfdocsConfig
from wfdocs.document import DocumentError, MarkerNotFoundError
from wfdocs.pipeline import GenerationOptions, GenerationPipeline


class TestGenerationOptions:
    def test_default_options(self) -> None:
        options = GenerationOptions()

        assert options.readme is None
        assert options.dry_run is False


class TestGenerationPipeline:
    """Tests for GenerationPipeline."""

    @pytest.fixture
    def pipeline(self) -> GenerationPipeline:
        """Create a pipeline instance."""
        return GenerationPipeline()

    def test_run_rewrites_readme(self, pipeline: GenerationPipeline, workflow_repo: Path) -> None:
        result = pipeline.run(workflow_repo)

        content = (workflow_repo / "README.md").read_text(encoding="utf-8")
        assert result.written is True
        assert result.changed is True
        assert result.workflow_count == 4
        assert result.reusable_count == 3
        assert "stale content" not in content
        assert content == result.content

    def test_errors_reported(self, pipeline: GenerationPipeline, workflow_repo: Path) -> None:
        result = pipeline.run(workflow_repo)

        assert result.has_errors()
        assert result.errors[0].file_path == ".github/workflows/broken.yml"

    def test_dry_run_does_not_write(self, pipeline: GenerationPipeline, workflow_repo: Path) -> None:
        readme = workflow_repo / "README.md"
        before = readme.read_bytes()

        result = pipeline.run(workflow_repo, GenerationOptions(dry_run=True))

        assert result.changed is True
        assert result.written is False
        assert readme.read_bytes() == before

    def test_second_run_is_a_no_op(self, pipeline: GenerationPipeline, workflow_repo: Path) -> None:
        pipeline.run(workflow_repo)
        readme = workflow_repo / "README.md"
        before = readme.read_bytes()

        result = pipeline.run(workflow_repo)

        assert result.changed is False
        assert result.written is False
        assert readme.read_bytes() == before

    def test_missing_marker_leaves_file_untouched(
        self, pipeline: GenerationPipeline, workflow_repo: Path
    ) -> None:
        readme = workflow_repo / "README.md"
        text = readme.read_text(encoding="utf-8")
        readme.write_text(text.replace("<!-- END AUTO-GENERATED: FOLDER-STRUCTURE -->", ""), encoding="utf-8")
        before = readme.read_bytes()

        with pytest.raises(MarkerNotFoundError):
            pipeline.run(workflow_repo)

        assert readme.read_bytes() == before

    def test_missing_readme(self, pipeline: GenerationPipeline, empty_repo: Path) -> None:
        with pytest.raises(DocumentError, match="not found"):
            pipeline.run(empty_repo)

    def test_readme_override(self, pipeline: GenerationPipeline, workflow_repo: Path) -> None:
        other = workflow_repo / "docs" / "WORKFLOWS.md"
        other.parent.mkdir()
        other.write_text((workflow_repo / "README.md").read_text(encoding="utf-8"), encoding="utf-8")

        result = pipeline.run(workflow_repo, GenerationOptions(readme=Path("docs/WORKFLOWS.md")))

        assert result.readme_path == other
        assert "stale content" in (workflow_repo / "README.md").read_text(encoding="utf-8")

    def test_configured_readme(self, workflow_repo: Path) -> None:
        config = WfdocsConfig(paths=PathsConfig(readme="/absolute/README.md"), ci=CIConfig())
        pipeline = GenerationPipeline(config)

        assert pipeline.readme_path(workflow_repo) == Path("/absolute/README.md")

    def test_result_to_dict(self, pipeline: GenerationPipeline, workflow_repo: Path) -> None:
        data = pipeline.run(workflow_repo, GenerationOptions(dry_run=True)).to_dict()

        assert data["reusable_count"] == 3
        assert data["written"] is False
        assert "content" not in data
