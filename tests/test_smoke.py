# tests/test_smoke.py
import json
import sys

import rig_correspondence as rc
from rig_correspondence import demo


def test_smoke():
    source = rc.TreeNode.from_paths("Source", ["Hips/Spine/Chest", "Hips/Tail"])
    target = rc.TreeNode.from_paths("Target", ["Hips/Spine/Chest"])
    payloads = [rc.Attachable(node, "phys_bone") for node in source.iter_descendants() if not node.children]

    report = rc.run_transfer_batch(source, [target], payloads, lambda payload, node, refs: True)

    assert isinstance(report, rc.BatchReport)
    assert [o.status for o in report.outcomes] == [rc.OutcomeStatus.MATCHED, rc.OutcomeStatus.FABRICATED]
    assert rc.format_path(rc.path_of(target, report.outcomes[1].target)) == "Hips/Tail"


def _run_demo(monkeypatch, capsys, *argv):
    monkeypatch.setattr(sys, "argv", ["rig-demo", *argv])
    demo.main()
    out = capsys.readouterr().out
    return json.loads(out[out.index("{"):])


def test_demo_cli(monkeypatch, capsys):
    result = _run_demo(monkeypatch, capsys)
    assert result["stopped"] is False
    by_source = {o["source"]: o for o in result["outcomes"]}
    assert by_source["Armature/Hips/Spine/Chest/Breast_L"]["target"] == "Armature/Hips/Spine/Chest/Breasts_L"
    assert by_source["Armature/Hips/Tail"]["target"] == "Armature/Hips/TailA"
    assert by_source["Armature/Hips/Skirt_01"]["status"] == "fabricated"


def test_demo_cli_stop(monkeypatch, capsys):
    result = _run_demo(monkeypatch, capsys, "--policy", "stop")
    assert result["stopped"] is True
    assert result["outcomes"][-1]["status"] == "stopped"


def test_demo_cli_trace(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["rig-demo", "--trace", "fuzzy", "--no-create"])
    demo.main()
    err = capsys.readouterr().err
    assert "[fuzzy][DEBUG] candidate Tail -> TailA" in err
