#!/usr/bin/env python3
"""Generate a manifest for a site from the command line.

Usage:
    python scripts/generate_manifest.py example.com [--icon logo.png] [--out output/]
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

# Project root on sys.path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))


def _parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a web app manifest for a site URL")
    parser.add_argument("url", help="Site URL (scheme optional)")
    parser.add_argument("--icon", type=Path, help="Source icon for generating missing images")
    parser.add_argument("--out", type=Path, default=Path("output"), help="Output directory")
    return parser.parse_args()


async def main() -> int:
    from manifest_studio.api.container import Container
    from manifest_studio.domain.entities.manifest import IconFile
    from manifest_studio.domain.errors import ManifestServiceError
    from manifest_studio.shared.logging import setup_logging

    args = _parse_args()
    container = Container()
    setup_logging(level=container.config.log_level, json_output=False)
    use_case = container.generator_use_case
    state = use_case.store.state

    try:
        use_case.update_link(args.url)
        if state.error:
            print(f"Error: {state.error}")
            return 1

        print(f"Manifest service: {container.config.manifest_service.base_url}")
        print(f"Requesting manifest for {state.url} ...")
        try:
            await use_case.get_manifest_information()
        except ManifestServiceError:
            print(f"Error: {state.error}")
            return 1

        for label, items in (("Suggestions", state.suggestions), ("Warnings", state.warnings), ("Errors", state.errors)):
            for item in items or []:
                print(f"{label}: {item}")

        if args.icon:
            print(f"Generating missing images from {args.icon} ...")
            await use_case.generate_missing_images(IconFile.from_path(args.icon))

        args.out.mkdir(parents=True, exist_ok=True)
        manifest = state.manifest.model_dump(mode="json", exclude_none=True)
        manifest["icons"] = [icon.model_dump(mode="json", exclude_none=True) for icon in state.icons]
        manifest_path = args.out / "manifest.json"
        manifest_path.write_text(json.dumps(manifest, indent=2), encoding="utf-8")
        print(f"Wrote {manifest_path}")

        for asset in state.assets or []:
            relative = Path(asset.filename)
            if relative.is_absolute() or ".." in relative.parts:
                print(f"Skipping asset with unsafe name: {asset.filename}")
                continue
            asset_path = args.out / relative
            asset_path.parent.mkdir(parents=True, exist_ok=True)
            asset_path.write_bytes(asset.data)
            print(f"Wrote {asset_path}")
        return 0
    finally:
        await container.aclose()


if __name__ == "__main__":
    sys.exit(asyncio.run(main()))
