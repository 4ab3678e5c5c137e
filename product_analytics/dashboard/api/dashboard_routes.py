# Product Dashboard API Routes
#
# Provides RESTful API endpoints for product analytics

from flask import Blueprint, Response, current_app, jsonify, request
import logging
from typing import Optional

from ..models import DateRange, PhysicalCostConfig
from ..services.analysis_service import ProductAnalysisService, ProductNotFoundError
from ..services.export_service import export_records_csv
from ..services.period_filter import get_date_range_for_period
from ...auth import SessionExpiredError, requires_auth, session_from_request

# Import timezone utilities for consistent timezone handling
from ...utils.timezone_utils import now_in_timezone, parse_date_string

logger = logging.getLogger(__name__)

products_bp = Blueprint('products', __name__, url_prefix='/api/products')


def get_analysis_service() -> ProductAnalysisService:
    """Service bound to the app's repository and cache and the caller's session"""
    return ProductAnalysisService(
        repository=current_app.config['PRODUCT_REPOSITORY'],
        cache=current_app.config['ANALYSIS_CACHE'],
        session=session_from_request(),
    )


def parse_date_range_args(args) -> Optional[DateRange]:
    """
    Read ?period=&start=&end= into a DateRange (None means every record).

    Raises:
        ValueError: If start or end is not a valid date
    """
    period = args.get('period', 'all')
    start = args.get('start')
    end = args.get('end')
    custom_start = parse_date_string(start) if start else None
    custom_end = parse_date_string(end) if end else None
    if custom_start and custom_end and custom_start > custom_end:
        raise ValueError('start must not be after end')
    return get_date_range_for_period(period, custom_start, custom_end)


def error_response(message: str, status: int):
    return jsonify({
        'success': False,
        'error': message
    }), status


@products_bp.errorhandler(SessionExpiredError)
def handle_session_expired(e):
    return error_response(str(e), 401)


@products_bp.errorhandler(ProductNotFoundError)
def handle_product_not_found(e):
    return error_response(str(e), 404)


@products_bp.route('/', methods=['GET'])
@requires_auth
def list_products():
    """Get the comparison-table summaries of the user's products"""
    try:
        date_range = parse_date_range_args(request.args)
    except ValueError as e:
        return error_response(str(e), 400)

    try:
        service = get_analysis_service()
        products = service.list_products()
        summaries = service.product_summaries(date_range)
        return jsonify({
            'success': True,
            'products': [product.to_dict() for product in products],
            'summaries': [summary.to_dict() for summary in summaries]
        })
    except SessionExpiredError:
        raise
    except Exception as e:
        logger.error(f"Error listing products: {str(e)}", exc_info=True)
        return error_response(str(e), 500)


@products_bp.route('/', methods=['POST'])
@requires_auth
def create_product():
    """
    Create a product

    Expected JSON payload:
    {
        "name": "Ceramic Mug",
        "image": "https://...",
        "is_physical": true,
        "physical_costs": {
            "shipping": {"amount": 5, "mode": "fixed"},
            "production": {"amount": 10, "mode": "percentage"}
        }
    }
    """
    data = request.get_json(silent=True)
    if not data or not str(data.get('name', '')).strip():
        return error_response('name is required', 400)

    try:
        service = get_analysis_service()
        user_id = service.session.require_user()
        product = service.repository.create_product(
            user_id=user_id,
            name=data['name'],
            image=data.get('image', ''),
            is_physical=bool(data.get('is_physical', False)),
            physical_costs=PhysicalCostConfig.from_dict(data.get('physical_costs')),
        )
        service.invalidate_product(product.product_id)
        return jsonify({
            'success': True,
            'product': product.to_dict()
        }), 201
    except SessionExpiredError:
        raise
    except Exception as e:
        logger.error(f"Error creating product: {str(e)}", exc_info=True)
        return error_response(str(e), 500)


@products_bp.route('/<product_id>', methods=['DELETE'])
@requires_auth
def delete_product(product_id):
    try:
        service = get_analysis_service()
        if not service.repository.delete_product(product_id, service.session.require_user()):
            raise ProductNotFoundError(f"Product not found: {product_id}")
        service.invalidate_product(product_id)
        return jsonify({'success': True})
    except (SessionExpiredError, ProductNotFoundError):
        raise
    except Exception as e:
        logger.error(f"Error deleting product {product_id}: {str(e)}", exc_info=True)
        return error_response(str(e), 500)


@products_bp.route('/portfolio', methods=['GET'])
@requires_auth
def get_portfolio():
    """Get totals across all products and the top products by profit"""
    try:
        date_range = parse_date_range_args(request.args)
    except ValueError as e:
        return error_response(str(e), 400)

    try:
        stats = get_analysis_service().portfolio(date_range)
        return jsonify({
            'success': True,
            'portfolio': stats.to_dict(),
            'generated_at': now_in_timezone().isoformat()
        })
    except SessionExpiredError:
        raise
    except Exception as e:
        logger.error(f"Error building portfolio: {str(e)}", exc_info=True)
        return error_response(str(e), 500)


@products_bp.route('/<product_id>/analysis', methods=['GET'])
@requires_auth
def get_product_analysis(product_id):
    """
    Get the full analysis of a product

    Query parameters:
        period: today | yesterday | week | month | all | custom
        start, end: YYYY-MM-DD bounds for the custom period
    """
    try:
        date_range = parse_date_range_args(request.args)
    except ValueError as e:
        return error_response(str(e), 400)

    try:
        analysis = get_analysis_service().analyze_product(product_id, date_range)
        return jsonify({
            'success': True,
            'analysis': analysis
        })
    except (SessionExpiredError, ProductNotFoundError):
        raise
    except Exception as e:
        logger.error(f"Error analyzing product {product_id}: {str(e)}", exc_info=True)
        return error_response(str(e), 500)


@products_bp.route('/<product_id>/records', methods=['POST'])
@requires_auth
def upsert_record(product_id):
    """
    Save the raw results of one day, replacing any record for that date

    Expected JSON payload:
    {
        "date": "2025-05-01",
        "investment": 100,
        "revenue": 150,
        "visits": 200,
        "clicks": 50,
        "impressions": 1000,
        "sales": 5,
        "checkouts_initiated": 10
    }
    """
    data = request.get_json(silent=True)
    if not data:
        return error_response('No data provided in request', 400)
    if not data.get('date'):
        return error_response('date is required', 400)

    try:
        record_date = parse_date_string(str(data['date']))
    except ValueError as e:
        return error_response(f"Invalid date: {e}", 400)

    try:
        record = get_analysis_service().upsert_daily_record(product_id, record_date, data)
        return jsonify({
            'success': True,
            'record': record.to_dict()
        })
    except (SessionExpiredError, ProductNotFoundError):
        raise
    except Exception as e:
        logger.error(f"Error saving record for {product_id}: {str(e)}", exc_info=True)
        return error_response(str(e), 500)


@products_bp.route('/<product_id>/physical-costs', methods=['PUT'])
@requires_auth
def update_physical_costs(product_id):
    """
    Change whether a product is physical and its shipping/production costs

    Expected JSON payload:
    {
        "is_physical": true,
        "physical_costs": {
            "shipping": {"amount": 5, "mode": "fixed"},
            "production": {"amount": 10, "mode": "percentage"}
        }
    }
    """
    data = request.get_json(silent=True)
    if not data or 'is_physical' not in data:
        return error_response('is_physical is required', 400)

    try:
        product = get_analysis_service().update_physical_costs(
            product_id,
            bool(data['is_physical']),
            PhysicalCostConfig.from_dict(data.get('physical_costs')),
        )
        return jsonify({
            'success': True,
            'product': product.to_dict()
        })
    except (SessionExpiredError, ProductNotFoundError):
        raise
    except Exception as e:
        logger.error(f"Error updating physical costs of {product_id}: {str(e)}", exc_info=True)
        return error_response(str(e), 500)


@products_bp.route('/<product_id>/export', methods=['GET'])
@requires_auth
def export_product(product_id):
    """Download the product's records for the period as CSV"""
    try:
        date_range = parse_date_range_args(request.args)
    except ValueError as e:
        return error_response(str(e), 400)

    try:
        records = get_analysis_service().export_records(product_id, date_range)
        content = export_records_csv(records)
        return Response(
            content,
            mimetype='text/csv',
            headers={'Content-Disposition': f'attachment; filename=product-{product_id}.csv'}
        )
    except (SessionExpiredError, ProductNotFoundError):
        raise
    except Exception as e:
        logger.error(f"Error exporting product {product_id}: {str(e)}", exc_info=True)
        return error_response(str(e), 500)


@products_bp.route('/monthly', methods=['GET'])
@requires_auth
def get_monthly():
    """
    Get month-by-month totals

    Query parameters:
        product_ids: comma separated ids, all products when omitted
        months: number of calendar months including the current one (default 6)
    """
    try:
        months = int(request.args.get('months', 6))
    except ValueError:
        return error_response('months must be an integer', 400)
    if months < 1:
        return error_response('months must be at least 1', 400)

    raw_ids = request.args.get('product_ids')
    product_ids = [pid for pid in raw_ids.split(',') if pid] if raw_ids else None

    try:
        monthly = get_analysis_service().monthly(product_ids=product_ids, months=months)
        return jsonify({
            'success': True,
            'months': monthly['months'],
            'summaries': monthly['summaries']
        })
    except (SessionExpiredError, ProductNotFoundError):
        raise
    except Exception as e:
        logger.error(f"Error building monthly summary: {str(e)}", exc_info=True)
        return error_response(str(e), 500)
