from acme.controller.abstract_action_controller import AbstractActionController


class IndexController(AbstractActionController):
    """Landing page.

    @module Main
    """

    @classmethod
    def get_purposes(cls):
        return ["ACTIONCONTROLLER"]

    def dispatch(self, request: dict) -> str:
        return "index"
