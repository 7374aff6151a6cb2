#!/usr/bin/env python3
"""
Store the built-in decision templates in the document store database.
Idempotent: safe to run multiple times (upserts).

Usage (from project root):
  python scripts/seed_templates.py
"""
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def main() -> int:
    from backend.database import Base, SessionLocal, engine
    from backend.models_db import RuleFileModel
    from backend.services.document_codec import derive_file_name, serialize_document
    from backend.services.template_loader import list_templates, load_template

    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        for name, title in list_templates():
            content = load_template(name)
            file_name = derive_file_name(name)
            row = db.get(RuleFileModel, file_name)
            if row:
                row.content = serialize_document(content)
            else:
                db.add(RuleFileModel(name=file_name, content=serialize_document(content)))
            print(f"Seeded template: {title} ({file_name}, {len(content.nodes)} nodes)")
        db.commit()
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
