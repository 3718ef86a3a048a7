from fastapi import APIRouter, HTTPException, Request

router = APIRouter()


def _widget(request: Request):
    widget = getattr(request.app.state, 'widget', None)
    if widget is None:
        raise HTTPException(status_code=503, detail='WIDGET_NOT_STARTED')
    return widget


@router.get('/display')
async def get_display(request: Request):
    widget = _widget(request)
    view = widget.last_view or widget.render()
    return view.model_dump()


@router.post('/display/render')
async def render_display(request: Request):
    return _widget(request).render().model_dump()


@router.get('/quotes')
async def get_quotes(request: Request):
    snapshot = _widget(request).snapshot
    return {
        'quotes': {symbol: quote.model_dump() for symbol, quote in snapshot.quotes.items()},
        'fetched_at': snapshot.fetched_at,
    }


@router.get('/quotes/{symbol}')
async def get_quote(symbol: str, request: Request):
    quote = _widget(request).snapshot.get(symbol.strip().upper())
    if quote is None:
        raise HTTPException(status_code=404, detail='QUOTE_UNKNOWN')
    return quote.model_dump()


@router.get('/pagination')
async def get_pagination(request: Request):
    return _widget(request).pagination.model_dump()


@router.get('/metrics/fetch')
async def fetch_metrics(request: Request):
    widget = _widget(request)
    metrics = widget.scheduler.metrics()
    metrics['render_count'] = widget.render_count
    metrics['notifications_published'] = widget.notifications.published
    return metrics
