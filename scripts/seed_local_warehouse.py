"""
Create a local SQLite warehouse loaded with the sample fixture.

    python scripts/seed_local_warehouse.py [path]

Then run the API against it with:

    USE_WAREHOUSE=true WAREHOUSE_URL=sqlite:///local_warehouse.db LEDGER_DATASET= ANALYTICS_DATASET=
"""
import os
import sys

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from sqlalchemy import select
from sqlalchemy.orm import Session

from seller_finance.core.warehouse import create_sqlite_engine, dataset_map
from seller_finance.models.ledger import Base, Vendor
from seller_finance.services.sample_data import seed_sample_data


def init_warehouse(path="local_warehouse.db"):
    engine = create_sqlite_engine(f"sqlite:///{path}").execution_options(
        schema_translate_map=dataset_map(None, None)
    )

    print("Creating warehouse tables...")
    Base.metadata.create_all(bind=engine)

    with Session(engine) as session:
        if session.execute(select(Vendor.id).limit(1)).first() is None:
            print("Seeding vendors, payouts and order lines...")
            seed_sample_data(session)
        else:
            print("Warehouse already seeded, skipping.")

    engine.dispose()
    print(f"Local warehouse ready at {path}")


if __name__ == "__main__":
    init_warehouse(*sys.argv[1:2])
