from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from printshop.demo import seed_demo_data
from printshop.persistence.db import get_session

router = APIRouter(tags=["demo"])


@router.post("/demo/seed")
def post_demo_seed(session: Session = Depends(get_session)):
    return seed_demo_data(session)
