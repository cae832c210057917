from fastapi import APIRouter, Depends
from pyremit_api.dependencies import discard_wizard, get_wizard
from pyremit_api.models import FieldUpdate
from pyremit_sdk import WizardController
from pyremit_sdk.validators import format_card_number

router = APIRouter(prefix="/wizard")


def _state(wizard: WizardController) -> dict:
    return {
        "step": wizard.step,
        "step_number": wizard.step_number,
        "total_steps": wizard.total_steps,
        "request": wizard.request.model_dump(mode="json"),
        "steps": [s.model_dump(mode="json") for s in wizard.steps()],
        "field_errors": wizard.field_errors(),
        "quote": wizard.quote().model_dump(mode="json"),
    }


@router.get("")
def wizard_state(wizard: WizardController = Depends(get_wizard)) -> dict:
    return _state(wizard)


@router.put("/fields")
def set_field(
    body: FieldUpdate, wizard: WizardController = Depends(get_wizard)
) -> dict:
    value = body.value

    if body.name == "card_number" and isinstance(value, str):
        value = format_card_number(value)

    wizard.set_field(body.name, value)

    return _state(wizard)


@router.post("/advance")
def advance(wizard: WizardController = Depends(get_wizard)) -> dict:
    wizard.advance()

    return _state(wizard)


@router.post("/retreat")
def retreat(wizard: WizardController = Depends(get_wizard)) -> dict:
    wizard.retreat()

    return _state(wizard)


@router.post("/edit")
def edit(wizard: WizardController = Depends(get_wizard)) -> dict:
    wizard.edit()

    return _state(wizard)


@router.get("/review")
def review(wizard: WizardController = Depends(get_wizard)) -> dict:
    return wizard.review().model_dump(mode="json")


@router.post("/confirm")
def confirm(wizard: WizardController = Depends(get_wizard)) -> dict:
    return wizard.confirm().model_dump(mode="json")


@router.delete("")
def end_session(discarded: bool = Depends(discard_wizard)) -> dict:
    return {"discarded": discarded}
