from ninja_extra import api_controller, route

from common.authentication import AuthProviderJWTAuth
from common.controllers import UserAwareController
from common.schema import ErrorResponse
from common.throttling import RegistrationThrottle
from events import schema
from events.service import registration_service


@api_controller("/register", auth=AuthProviderJWTAuth(), tags=["Registrations"])
class RegistrationController(UserAwareController):
    @route.post(
        "",
        url_name="register",
        response={201: schema.RegistrationCreatedSchema, 400: ErrorResponse, 404: ErrorResponse, 409: ErrorResponse},
        throttle=RegistrationThrottle(),
    )
    def register(self, payload: schema.RegistrationCreateSchema) -> tuple[int, schema.RegistrationCreatedSchema]:
        """Register for an event.

        All fields are required. The registration starts out pending; the ticket (with its QR code)
        is emailed once a moderator approves it. A user can register only once per event.
        """
        registration = registration_service.register(
            event_slug=payload.event_slug,
            name=payload.name,
            cohort=payload.cohort,
            batch=payload.batch,
            identity=self.identity(),
        )
        return 201, schema.RegistrationCreatedSchema(
            message=registration_service.REGISTRATION_SUBMITTED_MESSAGE,
            registration_id=registration.id,
            ticket_code=registration.ticket_code,
            status=registration.status,
        )
