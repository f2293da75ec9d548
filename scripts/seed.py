import argparse

from app.core.config import settings
from app.core.logging import setup_logging
from app.db.session import engine, Session, init_db
from app.db.seed import seed_all


def run_seed(seed_path: str) -> None:
    init_db()
    with Session(engine) as session:
        seed_all(session=session, seed_path=seed_path)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Référence en base les vidéos décrites dans un YAML.")
    parser.add_argument("--path", default="app/db/seed_data.yaml")
    args = parser.parse_args()

    setup_logging(settings.LOG_LEVEL, json_output=bool(settings.LOG_JSON))
    run_seed(args.path)
