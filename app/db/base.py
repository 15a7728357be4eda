from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Import the models so they are registered on Base.metadata
from app.models import (  # noqa: E402,F401
    user,
    client,
    project,
    bill,
    payment,
    rate,
    print_rate,
    settings,
    api_access_log,
    error_log
)
