import argparse

from perfboard.core.config import settings
from perfboard.core.logging import setup_logging
from perfboard.db.base import Base
from perfboard.db.session import SessionLocal, engine
from perfboard.schemas.employee import EmployeeCreate
from perfboard.schemas.evaluation import EvaluationCreate
from perfboard.storage import EvaluationStore, JsonFileStore, SqlStore
from perfboard.storage.fixtures import demo_employees, demo_evaluations


def seed(store: EvaluationStore) -> tuple[int, int]:
    """Create the demo employees and evaluations, skipping emails already present."""
    existing = {e.email: e.id for e in store.list_employees()}

    ids: dict[str, str] = {}
    created: set[str] = set()
    for demo in demo_employees():
        if demo.email in existing:
            ids[demo.id] = existing[demo.email]
            continue
        emp = store.create_employee(
            EmployeeCreate(
                name=demo.name,
                email=demo.email,
                position=demo.position,
                department=demo.department,
            )
        )
        ids[demo.id] = emp.id
        created.add(demo.id)

    # employees that already existed keep whatever evaluations they have
    created_evaluations = 0
    for demo in demo_evaluations():
        if demo.employee_id not in created:
            continue
        store.create_evaluation(
            EvaluationCreate(
                employee_id=ids[demo.employee_id],
                period=demo.period,
                scores=demo.scores,
                comments=demo.comments,
                evaluator=demo.evaluator,
            )
        )
        created_evaluations += 1
    return len(created), created_evaluations


def main():
    parser = argparse.ArgumentParser(description="Seed demo employees and evaluations")
    parser.add_argument(
        "--backend",
        choices=["sql", "json"],
        default=settings.STORAGE_BACKEND if settings.STORAGE_BACKEND != "memory" else "sql",
    )
    parser.add_argument("--json-path", default=settings.JSON_STORE_PATH)
    args = parser.parse_args()

    setup_logging(settings.LOG_LEVEL)

    if args.backend == "json":
        employees, evaluations = seed(JsonFileStore(args.json_path))
    else:
        Base.metadata.create_all(bind=engine)
        db = SessionLocal()
        try:
            employees, evaluations = seed(SqlStore(db))
        finally:
            db.close()

    print(f"Seeded {employees} employees and {evaluations} evaluations ({args.backend})")


if __name__ == "__main__":
    main()
