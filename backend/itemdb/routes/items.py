import logging
import math
import re

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import PlainTextResponse

from itemdb.storage import AlreadyExists, InvalidInput, ItemStore, NotFound

logger = logging.getLogger(__name__)

router = APIRouter(tags=["items"])

# No method restriction on any route.
METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]

# ASCII decimal with optional exponent; no whitespace, underscores or other digits.
PRICE_RE = re.compile(r"[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?", re.ASCII)


def get_store(request: Request) -> ItemStore:
    return request.app.state.store


def parse_price(raw: str) -> float:
    if not PRICE_RE.fullmatch(raw):
        raise InvalidInput("invalid price")
    price = float(raw)
    if not math.isfinite(price):
        raise InvalidInput("invalid price")
    return price


def require_name(raw: str) -> str:
    if not raw:
        raise InvalidInput("missing item")
    return raw


def _reply(message: str, store: ItemStore, status_code: int = 200) -> PlainTextResponse:
    return PlainTextResponse(f"{message}\n\n{store.visualize()}", status_code=status_code)


@router.api_route("/create", methods=METHODS)
def create_item(item: str = "", price: str = "", store: ItemStore = Depends(get_store)):
    try:
        name = require_name(item)
        value = parse_price(price)
        store.create(name, value)
    except (InvalidInput, AlreadyExists) as err:
        logger.info("create %r rejected: %s", item, err)
        raise HTTPException(status_code=400, detail=str(err)) from err
    return _reply(f"Item created: {name}, Price: ${value:.2f}", store, status_code=201)


@router.api_route("/read", methods=METHODS)
def read_item(item: str = "", store: ItemStore = Depends(get_store)):
    try:
        found = store.read(require_name(item))
    except InvalidInput as err:
        raise HTTPException(status_code=400, detail=str(err)) from err
    except NotFound as err:
        logger.info("read %r: %s", item, err)
        raise HTTPException(status_code=404, detail=str(err)) from err
    return _reply(f"Item found: {found.name}, Price: ${found.price:.2f}", store)


@router.api_route("/update", methods=METHODS)
def update_item(item: str = "", price: str = "", store: ItemStore = Depends(get_store)):
    # Unknown item is a 400 here, unlike read and delete.
    try:
        name = require_name(item)
        value = parse_price(price)
        store.update(name, value)
    except (InvalidInput, NotFound) as err:
        logger.info("update %r rejected: %s", item, err)
        raise HTTPException(status_code=400, detail=str(err)) from err
    return _reply(f"Item updated: {name}, New Price: ${value:.2f}", store)


@router.api_route("/delete", methods=METHODS)
def delete_item(item: str = "", store: ItemStore = Depends(get_store)):
    try:
        name = require_name(item)
        store.delete(name)
    except InvalidInput as err:
        raise HTTPException(status_code=400, detail=str(err)) from err
    except NotFound as err:
        logger.info("delete %r: %s", item, err)
        raise HTTPException(status_code=404, detail=str(err)) from err
    return _reply(f"Item deleted: {name}", store)
