from coursehub.client.api import CourseHubClient
from coursehub.client.forms import ContactForm, validate_form


class ContactFormService:
    """Sends the contact form once it passes local validation."""

    def __init__(self, client: CourseHubClient):
        self.client = client

    def send(self, **fields) -> str:
        form = validate_form(ContactForm, fields)
        return self.client.send_contact(form.to_payload())
