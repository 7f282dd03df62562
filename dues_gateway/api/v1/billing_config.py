"""/v1/billing-config - read and push the association's billing configuration"""

import logging
from typing import Any
from fastapi import APIRouter, Body, Depends, HTTPException, Request

from dues_gateway.api.v1.schemas import BillingConfigSchema
from dues_gateway.api.dependencies import get_config_store, get_request_id
from dues_gateway.domain.config_store import BillingConfigStore
from dues_gateway.domain.exceptions import InvalidBillingConfigError
from dues_gateway.infrastructure.observability.metrics import config_update_counter

router = APIRouter()


@router.get("/billing-config", response_model=BillingConfigSchema)
def get_billing_config(config_store: BillingConfigStore = Depends(get_config_store)):
    """Current normalized configuration used for debt calculations"""
    return BillingConfigSchema.from_domain(config_store.current())


@router.put("/billing-config", response_model=BillingConfigSchema)
def put_billing_config(
    request: Request,
    raw: Any = Body(...),
    config_store: BillingConfigStore = Depends(get_config_store),
):
    """
    Apply a configuration record as stored by the association.

    Body uses the store's keys (montoMensual, diaCierre, diaVencimiento,
    diasProntoPago, porcentajeMorosidad, porcentajeSancion, fechaCorteISO, ...).
    Unusable fields fall back to defaults individually.

    Returns:
        The normalized configuration now in effect
    """
    request_id = get_request_id(request)

    try:
        if not isinstance(raw, dict):
            raise InvalidBillingConfigError("Configuration record must be a JSON object")

        config = config_store.apply(raw)
        config_update_counter.labels(action="apply").inc()
        return BillingConfigSchema.from_domain(config)

    except InvalidBillingConfigError as e:
        logging.warning(f"Rejected billing configuration: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))


@router.delete("/billing-config", response_model=BillingConfigSchema)
def reset_billing_config(config_store: BillingConfigStore = Depends(get_config_store)):
    """Drop the pushed configuration and go back to defaults"""
    config = config_store.reset()
    config_update_counter.labels(action="reset").inc()
    return BillingConfigSchema.from_domain(config)
