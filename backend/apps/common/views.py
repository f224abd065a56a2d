import time

from django.conf import settings
from django.db import connections
from django.db.utils import OperationalError
from django.http import JsonResponse
from django_redis import get_redis_connection

from .logger import get_logger

logger = get_logger(__name__).bind(component='common', layer='health')


def _cache_check(alias='default'):
    backend = settings.CACHES.get(alias, {}).get('BACKEND', '')
    if 'django_redis' not in backend:
        logger.debug('Cache health check skipped; backend is not redis', backend=backend)
        return {'status': 'skipped', 'detail': 'cache backend is not redis'}
    try:
        pong = get_redis_connection(alias).ping()
    except Exception as e:  # pragma: no cover - depends on live redis
        logger.warning('Redis health check failed', error=str(e))
        return {'status': 'fail', 'error': str(e)}
    if not pong:
        logger.warning('Redis health check returned unexpected response')
        return {'status': 'fail'}
    logger.debug('Redis health check succeeded')
    return {'status': 'ok'}


def _db_check(alias='default'):
    started = time.time()
    try:
        conn = connections[alias]
        conn.cursor().execute('SELECT 1')
        latency = round((time.time() - started) * 1000, 2)
        logger.debug('Database health check succeeded', alias=alias, latency_ms=latency)
        return {'status': 'ok', 'latency_ms': latency}
    except OperationalError as e:
        logger.warning('Database health check encountered operational error', alias=alias, error=str(e))
        return {'status': 'fail', 'error': str(e)}


def live_health(request):
    """Liveness probe: process is up and can service requests."""
    logger.debug('Liveness probe served')
    return JsonResponse({'status': 'alive'})


def ready_health(request):
    """Readiness probe: the checkout path needs the database; the cache is advisory."""
    checks = {
        'database': _db_check(),
        'cache': _cache_check(),
    }
    failing = [name for name, r in checks.items() if r.get('status') == 'fail']
    overall_status = 'ok' if not failing else 'degraded'
    http_status = 200 if not failing else 503
    logger.info('Readiness probe evaluated', status=overall_status, failing_components=failing)
    return JsonResponse({'status': overall_status, 'checks': checks}, status=http_status)
