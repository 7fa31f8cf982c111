from fastapi import Request

from seller_finance.services.data_source import FinanceDataSource


def get_data_source(request: Request) -> FinanceDataSource:
    """The data source chosen at startup (see main.lifespan)."""
    return request.app.state.data_source
