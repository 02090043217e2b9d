"""Tests for the analyze() entry point."""

import pytest

import reactmcp as rm
from reactmcp._graph import NodeId, NodeKind


@pytest.fixture
def penguins_ir() -> rm.AppIR:
    """Four inputs, one computed value, two outputs sharing everything."""
    shared_inputs = ("x_var", "y_var", "trend")
    return rm.AppIR(
        inputs=[
            rm.InputDef(id="species", type="select", label="Species"),
            rm.InputDef(id="x_var", type="select", label="X axis"),
            rm.InputDef(id="y_var", type="select", label="Y axis"),
            rm.InputDef(id="trend", type="checkbox", label="Show trend line"),
        ],
        computed=[rm.ComputedDef(name="filtered_data", input_deps=("species",))],
        outputs=[
            rm.OutputDef(id="scatter", type="plot", input_deps=shared_inputs, computed_deps=("filtered_data",)),
            rm.OutputDef(id="stats", type="text", input_deps=shared_inputs, computed_deps=("filtered_data",)),
        ],
    )


@pytest.fixture
def chained_ir() -> rm.AppIR:
    return rm.AppIR(
        inputs=[rm.InputDef(id="dataset"), rm.InputDef(id="n_rows"), rm.InputDef(id="user_name")],
        computed=[
            rm.ComputedDef(name="base", input_deps=("dataset",)),
            rm.ComputedDef(name="filtered", input_deps=("n_rows",), computed_deps=("base",)),
        ],
        outputs=[
            rm.OutputDef(id="summary", computed_deps=("filtered",)),
            rm.OutputDef(id="greeting", input_deps=("user_name",)),
        ],
    )


def _group_with_output(result: rm.AnalysisResult, output_id: str) -> rm.ToolGroup:
    return next(group for group in result.tool_groups if output_id in group.output_ids)


class TestAnalyzeScenarios:
    def test_single_tool_group(self, penguins_ir: rm.AppIR) -> None:
        result = rm.analyze(penguins_ir)

        assert len(result.tool_groups) == 1
        group = result.tool_groups[0]
        assert group.name == "update_scatter_and_stats"
        assert group.input_ids == ["species", "x_var", "y_var", "trend"]
        assert group.output_ids == ["scatter", "stats"]
        assert group.computed_names == ("filtered_data",)
        assert group.description == "Update scatter and stats based on Species, X axis, Y axis, Show trend line"
        assert result.warnings == []

    def test_transitive_input_propagation(self, chained_ir: rm.AppIR) -> None:
        result = rm.analyze(chained_ir)
        group = _group_with_output(result, "summary")
        assert "dataset" in group.input_ids
        assert "n_rows" in group.input_ids

    def test_component_separation(self, chained_ir: rm.AppIR) -> None:
        result = rm.analyze(chained_ir)
        assert len(result.tool_groups) == 2

        summary = _group_with_output(result, "summary")
        greeting = _group_with_output(result, "greeting")
        assert summary is not greeting
        assert greeting.input_ids == ["user_name"]
        assert "user_name" not in summary.input_ids

    def test_inputs_deduplicated_across_paths(self) -> None:
        # dataset is read directly and through the computed value
        ir = rm.AppIR(
            inputs=[rm.InputDef(id="dataset")],
            computed=[rm.ComputedDef(name="data", input_deps=("dataset",))],
            outputs=[rm.OutputDef(id="table", input_deps=("dataset",), computed_deps=("data",))],
        )
        result = rm.analyze(ir)
        assert result.tool_groups[0].input_ids == ["dataset"]

    def test_degenerate_ir(self) -> None:
        result = rm.analyze(rm.AppIR())
        assert result.tool_groups == []
        assert result.warnings == []
        assert len(result.graph) == 0

    def test_unused_input_gets_its_own_group(self) -> None:
        ir = rm.AppIR(
            inputs=[rm.InputDef(id="x"), rm.InputDef(id="unused")],
            outputs=[rm.OutputDef(id="result", input_deps=("x",))],
        )
        result = rm.analyze(ir)
        assert [group.name for group in result.tool_groups] == ["update_result", "set_unused"]

    def test_graph_is_exposed(self, chained_ir: rm.AppIR) -> None:
        result = rm.analyze(chained_ir)
        assert NodeId(NodeKind.OUTPUT, "summary") in result.graph
        assert "input:dataset->output:summary" in result.graph.edges

    def test_repeatable(self, chained_ir: rm.AppIR) -> None:
        first = rm.analyze(chained_ir)
        second = rm.analyze(chained_ir)
        assert first.graph == second.graph
        assert first.tool_groups == second.tool_groups
        assert first.warnings == second.warnings


class TestAnalyzeTolerance:
    def test_dangling_computed_reference(self) -> None:
        ir = rm.AppIR(
            inputs=[rm.InputDef(id="x")],
            outputs=[rm.OutputDef(id="plot", input_deps=("x",), computed_deps=("missing",))],
        )
        result = rm.analyze(ir)
        assert len(result.tool_groups) == 1
        assert result.tool_groups[0].input_ids == ["x"]
        assert len(result.warnings) == 1
        assert "missing" in result.warnings[0]

    def test_dangling_reference_in_unread_computed_value(self) -> None:
        ir = rm.AppIR(
            inputs=[rm.InputDef(id="x")],
            computed=[rm.ComputedDef(name="a", input_deps=("x",), computed_deps=("typo",))],
        )
        result = rm.analyze(ir)
        assert len(result.warnings) == 1
        assert "typo" in result.warnings[0]

    def test_dangling_computed_reported_once_when_also_reached(self) -> None:
        ir = rm.AppIR(
            inputs=[rm.InputDef(id="x")],
            computed=[rm.ComputedDef(name="a", input_deps=("x",), computed_deps=("typo",))],
            outputs=[rm.OutputDef(id="out", computed_deps=("a",))],
        )
        result = rm.analyze(ir)
        assert len(result.warnings) == 1
        assert "typo" in result.warnings[0]

    def test_cycle_is_tolerated_and_flagged(self) -> None:
        ir = rm.AppIR(
            inputs=[rm.InputDef(id="x"), rm.InputDef(id="y")],
            computed=[
                rm.ComputedDef(name="a", input_deps=("x",), computed_deps=("b",)),
                rm.ComputedDef(name="b", input_deps=("y",), computed_deps=("a",)),
            ],
            outputs=[rm.OutputDef(id="out", computed_deps=("a",))],
        )
        result = rm.analyze(ir)
        assert len(result.tool_groups) == 1
        assert result.tool_groups[0].input_ids == ["x", "y"]
        assert any("cycle" in warning for warning in result.warnings)

    def test_strict_references_drops_unresolved_edges(self) -> None:
        ir = rm.AppIR(outputs=[rm.OutputDef(id="plot", computed_deps=("missing",))])

        tolerant = rm.analyze(ir)
        strict = rm.analyze(ir, strict_references=True)

        assert "computed:missing->output:plot" in tolerant.graph.edges
        assert strict.graph.edges == {}
        assert strict.warnings == tolerant.warnings

    def test_pattern_warnings_do_not_block_analysis(self) -> None:
        ir = rm.AppIR(
            inputs=[rm.InputDef(id="upload", type="file")],
            outputs=[rm.OutputDef(id="report", type="download", input_deps=("upload",))],
            observers=[rm.ObserverDef(kind="observeEvent", input_deps=("upload",))],
        )
        result = rm.analyze(ir)
        assert [group.name for group in result.tool_groups] == ["update_report"]
        assert len(result.warnings) == 3


class TestAnalyzeInputContract:
    def test_accepts_mapping(self) -> None:
        result = rm.analyze(
            {
                "inputs": [{"id": "x", "type": "select"}],
                "outputs": [{"id": "result", "type": "text", "input_deps": ["x"]}],
            },
        )
        assert result.tool_groups[0].name == "update_result"

    @pytest.mark.parametrize("bad", [None, [], "inputs", 42])
    def test_rejects_non_ir(self, bad: object) -> None:
        with pytest.raises(rm.AnalysisError, match="Expected an AppIR"):
            rm.analyze(bad)  # type: ignore[arg-type]

    def test_rejects_invalid_mapping(self) -> None:
        with pytest.raises(rm.AnalysisError, match="Invalid application IR"):
            rm.analyze({"inputs": [{"id": "x"}, {"id": "x"}]})

    def test_rejects_unknown_keys(self) -> None:
        with pytest.raises(rm.AnalysisError):
            rm.analyze({"widgets": []})


class TestAnalysisResult:
    def test_get_tool_group(self, penguins_ir: rm.AppIR) -> None:
        result = rm.analyze(penguins_ir)
        assert result.get_tool_group("update_scatter_and_stats") is result.tool_groups[0]
        with pytest.raises(KeyError):
            result.get_tool_group("nope")

    def test_to_dict(self, chained_ir: rm.AppIR) -> None:
        data = rm.analyze(chained_ir).to_dict()
        assert set(data) == {"graph", "tool_groups", "warnings"}
        assert "input:dataset" in data["graph"]["nodes"]
        assert "computed:base->computed:filtered" in data["graph"]["edges"]
        assert {group["name"] for group in data["tool_groups"]} == {"update_summary", "update_greeting"}
