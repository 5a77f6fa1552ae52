"""Operation Schemas — request envelope and per-operation variable models.

Invariants:
    - OperationRequest.operation is a plain str; unknown names rejected by the dispatcher
    - Each operation has exactly one variables model (mapped in services/operation_dispatch.py)
    - Field names are snake_case; post ids arrive as "id"
"""

from pydantic import BaseModel, Field


class OperationRequest(BaseModel):
    """Envelope for the single named-operation endpoint."""
    operation: str = Field(min_length=1, max_length=64)
    variables: dict = Field(default_factory=dict)


class UserInput(BaseModel):
    email: str
    name: str
    password: str


class PostInput(BaseModel):
    title: str
    content: str
    image_url: str | None = None


# --- Variables per operation -------------------------------------------------

class NoVariables(BaseModel):
    pass


class CreateUserVariables(BaseModel):
    user_input: UserInput


class LoginVariables(BaseModel):
    email: str
    password: str


class UpdateStatusVariables(BaseModel):
    status: str


class CreatePostVariables(BaseModel):
    post_input: PostInput


class PostsVariables(BaseModel):
    page: int | None = None


class PostIdVariables(BaseModel):
    post_id: str = Field(alias="id")


class UpdatePostVariables(BaseModel):
    post_id: str = Field(alias="id")
    post_input: PostInput
