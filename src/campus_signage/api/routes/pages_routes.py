"""
Server-rendered pages: the signage display and the admin page.
"""
import logging
from flask import Blueprint, render_template, request, redirect, url_for, current_app

from ...admin_client import StoreBackend
from ...clock import fixed_today
from ...display import event_cards, format_header_date, format_header_time
from ...lifecycle import CREATE_ERROR, EventForm, EventLifecycleManager
from ...store import StoreError
from ..auth import signin_required
from ..utils import get_store
from .events_routes import upcoming_events

logger = logging.getLogger(__name__)

pages_bp = Blueprint('pages', __name__)


def _manager() -> EventLifecycleManager:
    return EventLifecycleManager(StoreBackend(get_store()), clock=current_app.extensions["clock"])


def _render_admin(manager: EventLifecycleManager, status: int = 200):
    now = manager.clock()
    return render_template(
        'admin.html',
        view=manager.view,
        events=event_cards(manager.events),
        min_date=fixed_today(now).isoformat(),
    ), status


@pages_bp.route('/')
def display():
    """Full-screen signage: header, slideshow and upcoming events."""
    signage = current_app.config['SIGNAGE']
    try:
        events = upcoming_events()
        feed_error = False
    except StoreError as e:
        logger.error(f"Error loading events for display: {e}")
        events, feed_error = [], True

    weather = current_app.extensions["weather"].get_current_weather()
    now = current_app.extensions["clock"]()
    return render_template(
        'display.html',
        signage=signage,
        weather=weather,
        header_date=format_header_date(now),
        header_time=format_header_time(now),
        events=event_cards(events),
        feed_error=feed_error,
    )


@pages_bp.route('/admin')
@signin_required
def admin():
    manager = _manager()
    manager.fetch_events()
    return _render_admin(manager)


@pages_bp.route('/admin/events', methods=['POST'])
@signin_required
def admin_create_event():
    form = EventForm(
        event_date=request.form.get('event_date', ''),
        title=request.form.get('title', ''),
        time=request.form.get('time', ''),
        am_pm=request.form.get('am_pm', 'AM'),
        venue=request.form.get('venue', ''),
    )
    manager = _manager()
    manager.fetch_events(prune=False)
    if manager.submit(form):
        return redirect(url_for('pages.admin'))
    return _render_admin(manager, 500 if manager.view.error == CREATE_ERROR else 400)


@pages_bp.route('/admin/events/<int:event_id>/delete', methods=['POST'])
@signin_required
def admin_delete_event(event_id: int):
    manager = _manager()
    manager.fetch_events(prune=False)
    if manager.delete(event_id):
        return redirect(url_for('pages.admin'))
    return _render_admin(manager, 500)
