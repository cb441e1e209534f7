"""Form payloads (as validated from the public endpoints) and the submissions built from them."""

import uuid
from datetime import datetime, timezone
from typing import Annotated, Literal, Optional

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    EmailStr,
    Field,
    HttpUrl,
    StrictBool,
    StringConstraints,
    TypeAdapter,
    ValidationError,
    field_validator,
)

FeedbackCategory = Literal[
    "Question",
    "Suggestion",
    "Compliment",
    "Complaint",
    "Technical Issue",
    "Product Request",
]

FEEDBACK_CATEGORIES: tuple[str, ...] = (
    "Question",
    "Suggestion",
    "Compliment",
    "Complaint",
    "Technical Issue",
    "Product Request",
)
URGENT_CATEGORIES = frozenset({"Complaint", "Technical Issue"})

_HTTP_URL = TypeAdapter(HttpUrl)

SOURCE_CONTACT = "website_contact_form"
SOURCE_FEEDBACK = "website_feedback_form"
SOURCE_EXIT_INTENT = "exit_intent_popup"


def _strip(value: object) -> object:
    return value.strip() if isinstance(value, str) else value


# Names, email, phone and location are trimmed before their length rules apply.
# Messages are checked as submitted.
NameStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=50)]
CompanyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
TrimmedStr = Annotated[str, StringConstraints(strip_whitespace=True)]
TrimmedEmail = Annotated[EmailStr, BeforeValidator(_strip)]


class _FormModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ContactForm(_FormModel):
    """Contact form body (camelCase on the wire)."""

    first_name: NameStr = Field(alias="firstName")
    last_name: NameStr = Field(alias="lastName")
    email: TrimmedEmail
    phone: Optional[TrimmedStr] = None
    company_name: CompanyStr = Field(alias="companyName")
    message: str = ""

    @field_validator("phone")
    @classmethod
    def _blank_phone_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None


class ExitIntentForm(_FormModel):
    """Exit-intent popup lead: contact fields without a message, plus the page it came from."""

    first_name: NameStr = Field(alias="firstName")
    last_name: NameStr = Field(alias="lastName")
    email: TrimmedEmail
    phone: Optional[TrimmedStr] = None
    company_name: CompanyStr = Field(alias="companyName")
    page_url: Optional[TrimmedStr] = Field(default=None, alias="pageUrl")

    @field_validator("phone")
    @classmethod
    def _blank_phone_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None

    @field_validator("page_url")
    @classmethod
    def _http_url(cls, v: Optional[str]) -> Optional[str]:
        if not v:
            return None
        try:
            _HTTP_URL.validate_python(v)
        except ValidationError:
            raise ValueError("page URL must be an http(s) URL") from None
        return v


class FeedbackForm(_FormModel):
    """Feedback form body. contactConsent must be the boolean true."""

    name: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)]
    email: TrimmedEmail
    category: FeedbackCategory
    location_name: Optional[Annotated[str, StringConstraints(strip_whitespace=True, max_length=200)]] = Field(
        default=None, alias="locationName"
    )
    message: str = Field(min_length=10, max_length=2000)
    contact_consent: StrictBool = Field(alias="contactConsent")

    @field_validator("contact_consent")
    @classmethod
    def _consent_given(cls, v: bool) -> bool:
        if v is not True:
            raise ValueError("consent required")
        return v

    @field_validator("location_name")
    @classmethod
    def _blank_location_is_none(cls, v: Optional[str]) -> Optional[str]:
        return v or None


class ClientInfo(BaseModel):
    """Request metadata captured alongside a submission."""

    ip_address: str = "unknown"
    user_agent: str = "unknown"


def new_submission_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex}"


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class ContactSubmission(BaseModel):
    """A contact (or exit-intent) form plus server-derived metadata."""

    id: str
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    company_name: str
    message: str = ""
    source: str = SOURCE_CONTACT
    ip_address: str = "unknown"
    user_agent: str = "unknown"
    submitted_at: str

    @classmethod
    def from_form(cls, form: ContactForm, client: Optional[ClientInfo] = None) -> "ContactSubmission":
        client = client or ClientInfo()
        return cls(
            id=new_submission_id("contact"),
            first_name=form.first_name,
            last_name=form.last_name,
            email=str(form.email),
            phone=form.phone,
            company_name=form.company_name,
            message=form.message,
            source=SOURCE_CONTACT,
            ip_address=client.ip_address,
            user_agent=client.user_agent,
            submitted_at=utc_timestamp(),
        )

    @classmethod
    def from_exit_intent(cls, form: ExitIntentForm, client: Optional[ClientInfo] = None) -> "ContactSubmission":
        client = client or ClientInfo()
        page = form.page_url or "website"
        return cls(
            id=new_submission_id("exit"),
            first_name=form.first_name,
            last_name=form.last_name,
            email=str(form.email),
            phone=form.phone,
            company_name=form.company_name,
            message=f"Exit Intent Lead from {page}",
            source=SOURCE_EXIT_INTENT,
            ip_address=client.ip_address,
            user_agent=client.user_agent,
            submitted_at=utc_timestamp(),
        )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class FeedbackSubmission(BaseModel):
    """A feedback form plus server-derived metadata."""

    id: str
    name: str
    email: str
    category: str
    location_name: Optional[str] = None
    message: str
    contact_consent: bool = True
    source: str = SOURCE_FEEDBACK
    ip_address: str = "unknown"
    user_agent: str = "unknown"
    submitted_at: str

    @classmethod
    def from_form(cls, form: FeedbackForm, client: Optional[ClientInfo] = None) -> "FeedbackSubmission":
        client = client or ClientInfo()
        return cls(
            id=new_submission_id("feedback"),
            name=form.name,
            email=str(form.email),
            category=form.category,
            location_name=form.location_name,
            message=form.message,
            contact_consent=form.contact_consent,
            source=SOURCE_FEEDBACK,
            ip_address=client.ip_address,
            user_agent=client.user_agent,
            submitted_at=utc_timestamp(),
        )

    @property
    def first_name(self) -> str:
        """First word of the submitted name (used in greetings)."""
        parts = self.name.split()
        return parts[0] if parts else self.name

    @property
    def is_urgent(self) -> bool:
        return self.category in URGENT_CATEGORIES
