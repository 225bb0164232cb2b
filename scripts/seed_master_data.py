#!/usr/bin/env python3
"""Seed sample master data (lines, processes, equipments, materials, products).

This script is runnable directly (python scripts/seed_master_data.py) and also import-safe.
If you see `ModuleNotFoundError: No module named 'mes'`, run from the project root or set PYTHONPATH=. before running.
"""
import argparse
import sys
from pathlib import Path

# Ensure project root is on sys.path when running the script directly
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from mes.db import SessionLocal, init_db
from mes.core.exceptions import MesError
from mes.store import MesStore

SAMPLE_DATA = {
    "lines": [
        {"code": "L01", "name": "조립1라인", "location": "1공장", "capacity": 500},
        {"code": "L02", "name": "도장라인", "location": "2공장", "capacity": 300},
    ],
    "processes": [
        {"code": "P01", "name": "절단", "line": "조립1라인", "standard_time": 5},
        {"code": "P02", "name": "용접", "line": "조립1라인", "standard_time": 12},
        {"code": "P03", "name": "도장", "line": "도장라인", "standard_time": 8},
    ],
    "equipments": [
        {"code": "E01", "name": "레이저절단기", "line": "조립1라인"},
        {"code": "E02", "name": "용접로봇", "line": "조립1라인"},
        {"code": "E03", "name": "도장부스", "line": "도장라인"},
    ],
    "materials": [
        {"code": "M001", "name": "강판 1.2T", "category": "원자재", "unit": "EA"},
        {"code": "M002", "name": "용접봉", "category": "부자재", "unit": "KG"},
        {"code": "M003", "name": "도료(회색)", "category": "부자재", "unit": "L"},
    ],
    "products": [
        {"code": "FG-100", "name": "브라켓 A", "category": "제품", "unit": "EA"},
    ],
}


def main():
    parser = argparse.ArgumentParser(description='Seed sample master data for the MES service.')
    parser.add_argument('--only', choices=sorted(SAMPLE_DATA), action='append',
                        help='Seed only the given directory (repeatable)')
    args = parser.parse_args()

    try:
        init_db()
    except Exception as exc:
        print("Warning: could not create tables on startup:", exc)

    kinds = args.only or list(SAMPLE_DATA)
    with SessionLocal() as db:
        store = MesStore(db)
        for kind in kinds:
            if store.list_master(kind):
                print(f"{kind} already seeded")
                continue
            print(f"Seeding {kind}")
            for record in SAMPLE_DATA[kind]:
                try:
                    store.add_master(kind, record)
                except MesError as exc:
                    print(f"  skip {record['code']}: {exc.message}")
            print("Done")


if __name__ == '__main__':
    main()
