from fastapi import APIRouter

from .credit_score import credit_score_router
from .obligations import obligations_router
from .origination import origination_router
from .portfolio import portfolio_router

router = APIRouter()

router.include_router(credit_score_router, tags=["Credit Score"])
router.include_router(origination_router, tags=["Origination"])
router.include_router(obligations_router, tags=["Obligations"])
router.include_router(portfolio_router, tags=["Portfolio"])
