import uuid

from pydantic import BaseModel


class ChallengeResponse(BaseModel):
    id: uuid.UUID
    hash: str
    salt: str
