from acme.controller.abstract_action_controller import AbstractActionController
from acme.service.error import log_error_handler_service as logging_service


class ContactActionController(AbstractActionController):
    """Handles the contact form.

    @display "Contact"
    """

    @classmethod
    def get_purposes(cls):
        return ("ACTIONCONTROLLER", "CONTACT.FORM")

    def dispatch(self, request: dict) -> str:
        logging_service.LogErrorHandlerService().write_log("contact")
        return "contact"
