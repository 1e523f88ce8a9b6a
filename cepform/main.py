from .entrypoints.fastapi_app import create_app

# uvicorn cepform.main:app --reload
app = create_app()
