"""Unit tests for template renderer."""

from collections.abc import Callable
from pathlib import Path

import pytest

from wfdocs.config import CategoryConfig, TableConfig, TemplatesConfig, WfdocsConfig
from wfdocs.document import FOLDER_TREE_REGION, WORKFLOWS_REGION, MarkerNotFoundError
from wfdocs.models import WorkflowRecord
from wfdocs.scanner import collect
from wfdocs.templates import DocumentRenderer
from wfdocs.templates.renderer import WORKFLOWS_NOTICE

HEADER = "| Workflow | Description | Inputs | Outputs | Secrets |"


class TestRenderWorkflows:
    """Tests for the capability table."""

    @pytest.fixture
    def renderer(self) -> DocumentRenderer:
        """Create a renderer instance."""
        return DocumentRenderer()

    def test_single_row(
        self, renderer: DocumentRenderer, make_record: Callable[..., WorkflowRecord]
    ) -> None:
        """Test the exact table for one workflow."""
        record = make_record(
            name="Unit Tests",
            file_name="test-unit.yml",
            description="Run the unit tests",
            inputs=["node-version", "coverage"],
            outputs=["coverage-percent"],
        )

        output = renderer.render_workflows([record])

        assert output == (
            "### 🧪 Testing\n"
            "\n"
            f"{HEADER}\n"
            "|:---------|:------------|:-------|:--------|:--------|\n"
            "| [**Unit Tests**](.github/workflows/test-unit.yml) | Run the unit tests "
            "| `node-version`<br>`coverage` | `coverage-percent` | *None* |"
        )

    def test_internal_workflows_excluded(
        self, renderer: DocumentRenderer, make_record: Callable[..., WorkflowRecord]
    ) -> None:
        records = [
            make_record(name="CI", file_name="ci.yml", is_reusable=False),
            make_record(name="Deploy", file_name="deploy-app.yml"),
        ]

        output = renderer.render_workflows(records)

        assert "ci.yml" not in output
        assert "deploy-app.yml" in output

    def test_no_reusable_workflows(
        self, renderer: DocumentRenderer, make_record: Callable[..., WorkflowRecord]
    ) -> None:
        output = renderer.render_workflows([make_record(is_reusable=False)])

        assert output == "No reusable workflows found."

    def test_empty(self, renderer: DocumentRenderer) -> None:
        assert renderer.render_workflows([]) == "No reusable workflows found."

    def test_missing_description(
        self, renderer: DocumentRenderer, make_record: Callable[..., WorkflowRecord]
    ) -> None:
        output = renderer.render_workflows([make_record()])

        assert "*No description provided*" in output

    def test_categories_in_first_seen_order(
        self, renderer: DocumentRenderer, make_record: Callable[..., WorkflowRecord]
    ) -> None:
        """Test that groups follow the record order, separated by one blank line."""
        records = [
            make_record(name="Deploy", file_name="deploy-a.yml"),
            make_record(name="Lint", file_name="lint-a.yml"),
            make_record(name="Tests", file_name="test-a.yml"),
            make_record(name="Release", file_name="release-a.yml"),
        ]

        output = renderer.render_workflows(records)

        headings = [line for line in output.splitlines() if line.startswith("### ")]
        assert headings == ["### 🚀 Deployment", "### 🔧 Code Quality", "### 🧪 Testing"]
        assert "*None* |\n\n### 🔧 Code Quality" in output
        assert output.count(HEADER) == 3

    def test_long_description_wrapped(self, make_record: Callable[..., WorkflowRecord]) -> None:
        renderer = DocumentRenderer(WfdocsConfig(table=TableConfig(description_width=10)))

        output = renderer.render_workflows([make_record(description="Run the unit tests")])

        assert "| Run the <br>unit tests |" in output

    def test_pipe_in_description_escaped(
        self, renderer: DocumentRenderer, make_record: Callable[..., WorkflowRecord]
    ) -> None:
        output = renderer.render_workflows([make_record(description="a | b")])

        assert "a \\| b" in output

    def test_custom_categories(self, make_record: Callable[..., WorkflowRecord]) -> None:
        config = WfdocsConfig(categories=[CategoryConfig(label="Pipelines", icon="🔁", prefixes=["pipe-"])])
        renderer = DocumentRenderer(config)

        output = renderer.render_workflows(
            [make_record(file_name="pipe-a.yml"), make_record(file_name="test-a.yml")]
        )

        assert "### 🔁 Pipelines" in output
        assert "### 📦 Miscellaneous" in output

    def test_sample_repo(self, renderer: DocumentRenderer, workflow_repo: Path) -> None:
        records = collect(workflow_repo).workflows

        output = renderer.render_workflows(records)

        assert (
            "| [**deploy-prod**](.github/workflows/deploy-prod.yml) "
            "| Deploy the application to the production <br>environment "
            "| `environment` | *None* | `DEPLOY_TOKEN`<br>`SLACK_WEBHOOK` |"
        ) in output
        assert "[**Lint and Format**](.github/workflows/lint-format.yaml)" in output
        assert "ci.yml" not in output


class TestRenderBlock:
    """Tests for region blocks."""

    def test_block_layout(self) -> None:
        renderer = DocumentRenderer()

        block = renderer.render_block(WORKFLOWS_REGION, "BODY", WORKFLOWS_NOTICE)
        lines = block.split("\n")

        assert lines[0] == WORKFLOWS_REGION.begin
        assert lines[1] == "## 📦 Available Workflows"
        assert "> ⚡ **Auto-Generated** ⚡" in lines
        assert f"> {WORKFLOWS_NOTICE[0]}" in lines
        assert lines[-2] == "BODY"
        assert lines[-1] == WORKFLOWS_REGION.end

    def test_custom_template_dir(self, tmp_path: Path) -> None:
        """Test that a template directory overrides the packaged templates."""
        (tmp_path / "section.md.j2").write_text("{{ region.begin }}\n[{{ body }}]\n{{ region.end }}\n")
        renderer = DocumentRenderer(WfdocsConfig(templates=TemplatesConfig(dir=str(tmp_path))))

        block = renderer.render_block(FOLDER_TREE_REGION, "tree", ())

        assert block == f"{FOLDER_TREE_REGION.begin}\n[tree]\n{FOLDER_TREE_REGION.end}"

    def test_broken_template_raises(self, tmp_path: Path) -> None:
        (tmp_path / "section.md.j2").write_text("{{ region.begin ")
        renderer = DocumentRenderer(WfdocsConfig(templates=TemplatesConfig(dir=str(tmp_path))))

        with pytest.raises(ValueError):
            renderer.render_block(WORKFLOWS_REGION, "x", ())


class TestRenderDocument:
    """Tests for full README rendering."""

    def test_splices_both_regions(self, marked_readme: str, workflow_repo: Path) -> None:
        renderer = DocumentRenderer()
        records = collect(workflow_repo).workflows

        result = renderer.render_document(marked_readme, records, workflow_repo)

        assert "old table" not in result
        assert "old tree" not in result
        assert "### 🧪 Testing" in result
        assert "```text\n.github/\n" in result
        assert result.startswith("# Project\n\nIntro paragraph.\n\n")
        assert result.endswith("\n\n## Footer\n")

    def test_deterministic(self, marked_readme: str, workflow_repo: Path) -> None:
        renderer = DocumentRenderer()
        records = collect(workflow_repo).workflows

        first = renderer.render_document(marked_readme, records, workflow_repo)
        second = renderer.render_document(first, records, workflow_repo)

        assert first == second

    def test_tree_uses_record_names(
        self, write_workflow: Callable[[str, str], Path], empty_repo: Path
    ) -> None:
        write_workflow("my-flow.yml", "name: Reusable Slack Notify\non: workflow_call\n")
        records = collect(empty_repo).workflows

        table, tree = DocumentRenderer().render(records, empty_repo)

        assert "### 🔔 Notifications" in table
        assert "# 🔔 Notifications" in tree

    def test_missing_marker(self, tmp_path: Path) -> None:
        renderer = DocumentRenderer()

        with pytest.raises(MarkerNotFoundError):
            renderer.render_document("# No markers\n", [], tmp_path)


class TestPreview:
    def test_short_document_unchanged(self) -> None:
        assert DocumentRenderer().preview("a\nb", max_lines=5) == "a\nb"

    def test_truncated(self) -> None:
        document = "\n".join(str(i) for i in range(10))

        preview = DocumentRenderer().preview(document, max_lines=3)

        assert preview.startswith("0\n1\n2\n")
        assert "[7 more lines]" in preview
