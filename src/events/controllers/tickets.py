from django.http import HttpResponse
from ninja_extra import ControllerBase, api_controller, route

from common.schema import ErrorResponse
from events import models, schema
from events.service import registration_service
from events.utils import make_ticket_qr_png


@api_controller("/tickets", auth=None, tags=["Tickets"])
class TicketController(ControllerBase):
    @route.get(
        "/{ticket_code}",
        url_name="get_ticket",
        response={200: schema.TicketSchema, 404: ErrorResponse},
    )
    def get_ticket(self, ticket_code: str) -> models.EventRegistration:
        """Look up a ticket by its code.

        This is where ticket QR codes point to. Shows the registration status (pending, approved, rejected)
        together with the event it belongs to.
        """
        return registration_service.get_ticket(ticket_code)

    @route.get("/{ticket_code}/qr.png", url_name="get_ticket_qr", response={404: ErrorResponse})
    def get_ticket_qr(self, ticket_code: str) -> HttpResponse:
        """The ticket's QR code as a PNG image."""
        registration = registration_service.get_ticket(ticket_code)
        return HttpResponse(make_ticket_qr_png(registration.ticket_code), content_type="image/png")
