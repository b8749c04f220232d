import uuid

from fastapi import FastAPI, APIRouter, Body, HTTPException, Query
import structlog

from . import challenges, models

log = structlog.get_logger()

# Create the FastAPI app
app = FastAPI(title="Salted Hash Challenge Demo API")

router = APIRouter()

store = challenges.ChallengeStore()


@router.post("/challenges", status_code=201, response_model=models.ChallengeResponse)
def create_challenge(length: int = Query(challenges.DEFAULT_LENGTH, ge=1, le=challenges.MAX_LENGTH)):
    """ Generate a challenge: the SHA-256 of a random salt followed by a random lowercase password. """
    challenge = store.create(length)
    return models.ChallengeResponse(
        id=challenge.id,
        hash=challenge.hash.hex(),
        salt=challenge.salt.hex(),
    )


@router.post("/challenges/{challenge_id}/answer", response_model=str)
def answer_challenge(challenge_id: uuid.UUID, answer: str = Body(...)):
    """ Check an answer. The body is the password as a JSON string; the flag is returned on success. """
    try:
        correct = store.answer(challenge_id, answer)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown challenge: {challenge_id}")

    if not correct:
        log.warning("wrong answer", id=str(challenge_id), answer=answer)
        raise HTTPException(status_code=400, detail="Wrong answer")

    return store.get(challenge_id).flag


app.include_router(router)
