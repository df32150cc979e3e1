# src/rig_correspondence/demo.py
import argparse
import json
import logging
import sys

SOURCE_PATHS = [
    "Armature/Hips/Spine/Chest/Neck/Head",
    "Armature/Hips/Spine/Chest/Breast_L",
    "Armature/Hips/Spine/Chest/Shoulder_L/UpperArm_L",
    "Armature/Hips/Tail",
    "Armature/Hips/Skirt_01",
]

TARGET_PATHS = [
    "Armature/Hips/Spine/Chest/Neck/Head",
    "Armature/Hips/Spine/Chest/Breasts_L",
    "Armature/Hips/Spine/Chest/Left shoulder/Left arm",
    "Armature/Hips/TailA",
    "Armature/Hips/TailB",
    "Armature/Hips/TailC",
]

POLICIES = ("first", "create", "skip", "stop")


def main():
    """CLI demo: transfer placeholder payloads from a sample rig onto a renamed one."""
    from .resolution.bone import (
        create_new_policy,
        first_candidate_policy,
        skip_policy,
        stop_policy,
    )
    from .resolution.general.utils import set_topics
    from .resolution.hierarchy import TreeNode, format_path, path_of
    from .resolution.orchestrator import Attachable, run_transfer_batch

    parser = argparse.ArgumentParser(
        prog="rig-demo",
        description="Resolve sample source bones onto a differently named target rig.",
    )
    parser.add_argument(
        "--policy",
        choices=POLICIES,
        default="first",
        help="How ambiguous matches are settled",
    )
    parser.add_argument(
        "--no-create",
        action="store_true",
        dest="no_create",
        help="Never fabricate missing target nodes",
    )
    parser.add_argument("--debug", action="store_true", help="Verbose debug logs")
    parser.add_argument(
        "--trace",
        default="",
        metavar="TOPICS",
        help="Comma-separated trace topics to print (e.g. fuzzy, or all)",
    )

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if args.trace:
        set_topics(args.trace.split(","))

    policy = {
        "first": first_candidate_policy,
        "create": create_new_policy,
        "skip": skip_policy,
        "stop": stop_policy,
    }[args.policy]

    source = TreeNode.from_paths("Source", SOURCE_PATHS)
    target = TreeNode.from_paths("Target", TARGET_PATHS)
    payloads = [
        Attachable(node=node, kind="phys_bone")
        for node in source.iter_descendants()
        if not node.children
    ]

    try:
        report = run_transfer_batch(
            source,
            [target],
            payloads,
            copy_payload=lambda payload, node, refs: True,
            decision_maker=policy,
            create_if_missing=not args.no_create,
        )
    except Exception as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        sys.exit(1)

    result = {
        "stopped": report.stopped,
        "outcomes": [
            {
                "source": format_path(path_of(source, o.payload.node)),
                "status": o.status.value,
                "target": format_path(path_of(target, o.target)) if o.target else None,
                "strategy": o.strategy,
                "confidence": round(o.confidence, 3),
            }
            for o in report.outcomes
        ],
    }
    print("\n🦴 Rig Correspondence Result:\n")
    print(json.dumps(result, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    main()
