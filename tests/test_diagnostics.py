"""Tests for pattern diagnostics and reference checks."""

from reactmcp._diagnostics import check_references, diagnose
from reactmcp._ir import AppIR, ComputedDef, InputDef, ObserverDef, OutputDef
from reactmcp._resolve import unresolved_computed_message


class TestDiagnose:
    def test_clean_app(self) -> None:
        ir = AppIR(
            inputs=[InputDef(id="x", type="select")],
            outputs=[OutputDef(id="result", type="text", input_deps=("x",))],
        )
        assert diagnose(ir) == []

    def test_empty_app(self) -> None:
        assert diagnose(AppIR()) == []

    def test_dynamic_ui_reported_once(self) -> None:
        ir = AppIR(outputs=[OutputDef(id="a", type="ui"), OutputDef(id="b", type="html")])
        warnings = diagnose(ir)
        assert len(warnings) == 1
        assert "dynamic UI" in warnings[0]

    def test_file_upload(self) -> None:
        ir = AppIR(inputs=[InputDef(id="upload", type="file")])
        warnings = diagnose(ir)
        assert len(warnings) == 1
        assert "fileInput" in warnings[0]

    def test_observers_reported_with_count(self) -> None:
        ir = AppIR(observers=[ObserverDef(kind="observeEvent", input_deps=("go",)), ObserverDef()])
        assert diagnose(ir) == [
            "App has 2 observer(s) that may contain side effects requiring manual review.",
        ]

    def test_download(self) -> None:
        ir = AppIR(outputs=[OutputDef(id="report", type="download")])
        warnings = diagnose(ir)
        assert len(warnings) == 1
        assert "download" in warnings[0]

    def test_all_categories_in_order(self) -> None:
        ir = AppIR(
            inputs=[InputDef(id="upload", type="file")],
            outputs=[OutputDef(id="panel", type="ui"), OutputDef(id="report", type="download")],
            observers=[ObserverDef()],
        )
        warnings = diagnose(ir)
        assert len(warnings) == 4
        assert "dynamic UI" in warnings[0]
        assert "fileInput" in warnings[1]
        assert "observer" in warnings[2]
        assert "download" in warnings[3]


class TestCheckReferences:
    def test_clean_app(self) -> None:
        ir = AppIR(
            inputs=[InputDef(id="x")],
            computed=[ComputedDef(name="a", input_deps=("x",)), ComputedDef(name="b", computed_deps=("a",))],
            outputs=[OutputDef(id="out", computed_deps=("b",))],
        )
        assert check_references(ir) == []

    def test_undefined_inputs(self) -> None:
        ir = AppIR(
            computed=[ComputedDef(name="a", input_deps=("missing_in",))],
            outputs=[OutputDef(id="out", input_deps=("typo",))],
        )
        warnings = check_references(ir)
        assert len(warnings) == 2
        assert "Output 'out'" in warnings[0]
        assert "'typo'" in warnings[0]
        assert "Computed value 'a'" in warnings[1]

    def test_cycle(self) -> None:
        ir = AppIR(
            computed=[
                ComputedDef(name="a", computed_deps=("b",)),
                ComputedDef(name="b", computed_deps=("a",)),
                ComputedDef(name="c"),
            ],
        )
        warnings = check_references(ir)
        assert len(warnings) == 1
        assert "cycle" in warnings[0]
        assert "a" in warnings[0]
        assert "c" not in warnings[0].split(":", 1)[1]

    def test_self_loop(self) -> None:
        ir = AppIR(computed=[ComputedDef(name="a", computed_deps=("a",))])
        assert check_references(ir) == ["Computed values form a dependency cycle: a."]

    def test_undefined_computed_dependency(self) -> None:
        ir = AppIR(
            inputs=[InputDef(id="x")],
            computed=[
                ComputedDef(name="a", input_deps=("x",), computed_deps=("typo",)),
                ComputedDef(name="b", computed_deps=("typo", "a")),
            ],
        )
        warnings = check_references(ir)
        assert warnings == [unresolved_computed_message("typo")]

    def test_undefined_observer_input(self) -> None:
        ir = AppIR(
            inputs=[InputDef(id="go")],
            observers=[ObserverDef(input_deps=("go",)), ObserverDef(kind="observeEvent", input_deps=("save",))],
        )
        warnings = check_references(ir)
        assert len(warnings) == 1
        assert "Observer 2 (observeEvent)" in warnings[0]
        assert "'save'" in warnings[0]
