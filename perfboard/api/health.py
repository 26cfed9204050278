from fastapi import APIRouter, Depends

from perfboard.storage import EvaluationStore, get_store

router = APIRouter(tags=["health"])


@router.get("/health")
def health(store: EvaluationStore = Depends(get_store)):
    # Raises StorageUnavailableError (503) when the backend is down
    store.ping()
    return {"status": "ok", "storage": store.backend_name}
