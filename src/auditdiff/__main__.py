import argparse
import json
import sys
from pathlib import Path

from .config.field_map import load_descriptor, read_document
from .config.settings import DiffSettings
from .core.diff_service import DiffService
from .utils.log import log
from .utils.references import looks_like_object_id


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Audit diff of two snapshots of the same entity.")
    parser.add_argument("old", type=Path, help="Old snapshot (YAML or JSON).")
    parser.add_argument("new", type=Path, help="New snapshot (YAML or JSON).")
    parser.add_argument("--map", dest="field_map", type=Path, required=True, help="Field map file.")
    parser.add_argument("--config", type=Path, default=None, help="Settings YAML file.")
    parser.add_argument("--delimiter", default=None, help="Label path delimiter.")
    parser.add_argument("--empty-label", default=None, help="Text shown for missing values.")
    parser.add_argument("--object-ids", action="store_true", help="Do not descend into 24-hex document ids.")
    args = parser.parse_args(argv)

    try:
        overrides = {
            key: value
            for key, value in (("delimiter", args.delimiter), ("empty_label", args.empty_label))
            if value is not None
        }
        settings = DiffSettings.load(args.config, **overrides)
        descriptor = load_descriptor(args.field_map)
        for path in (args.old, args.new):
            if not path.exists():
                raise FileNotFoundError(f"{path} не найден")

        service = DiffService(
            descriptor,
            settings=settings,
            is_reference=looks_like_object_id if args.object_ids else None,
        )
        changes = service.diff(read_document(args.old), read_document(args.new))
        print(json.dumps([change.model_dump() for change in changes], ensure_ascii=False, indent=2))

    except Exception as e:
        log(f"❌ Критическая ошибка: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
