"""Run the API with uvicorn: `python -m construction_calc` or `construction-calc`."""

import uvicorn

from .config import settings


def main():
    uvicorn.run("construction_calc.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    main()
