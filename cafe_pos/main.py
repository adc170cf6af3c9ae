"""Entry point for the café POS Textual app."""

from __future__ import annotations

from cafe_pos.persistence import SnapshotStore
from cafe_pos.pos_app import CafePosApp
from cafe_pos.store import PosStore


def main() -> None:
    CafePosApp(PosStore(SnapshotStore())).run()


if __name__ == "__main__":
    main()
