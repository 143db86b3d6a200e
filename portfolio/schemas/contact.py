from pydantic import BaseModel, Field

from ..utils.docs import example


class ContactForm(BaseModel):
    name: str | None = Field(None, description="Full name of the sender")
    email: str | None = Field(None, description="Email address of the sender")
    company: str | None = Field(None, description="Company of the sender (optional)")
    message: str | None = Field(None, description="Content of the message")
    honeypot: str | None = Field(None, description="Hidden field, must be left empty")

    model_config = example(
        name="Jane Doe",
        email="jane@example.com",
        company="ACME",
        message="Hi! I would like to talk about a project.",
    )


class ContactSubmission(BaseModel):
    name: str = Field(min_length=2, description="Trimmed full name of the sender")
    email: str = Field(description="Trimmed email address of the sender")
    company: str = Field("", description="Trimmed company, empty if not given")
    message: str = Field(min_length=10, max_length=4000, description="Trimmed message")


class ContactResponse(BaseModel):
    ok: bool = Field(description="Whether the message has been sent")
    message: str = Field(description="Acknowledgement to show to the sender")
    messageId: str | None = Field(None, description="Identifier of the outbound email")  # noqa: N815

    model_config = example(
        ok=True, message="Thank you! Your message has been sent.", messageId="<170000000000.1.42@example.com>"
    )


class InvalidSubmissionResponse(BaseModel):
    ok: bool = Field(False)
    errors: dict[str, str] = Field(description="Error message per invalid field")

    model_config = example(ok=False, errors={"name": "Please enter your full name."})
