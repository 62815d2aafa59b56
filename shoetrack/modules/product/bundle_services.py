"""Bundle expansion: one request with N size/color pairs becomes N products
sharing a bundle id, price, image and base name.

Validation runs before anything touches the session, and the insert is a
single transaction, so a bundle is either created whole or not at all.
"""
import uuid
from flask import current_app
from shoetrack.models import db, Product
from shoetrack.constants import (
    GenderCategory, AgeGroup, Condition,
    SHOE_CODE_SEQUENCE_WIDTH, SHOE_CODE_SIZE_WIDTH, SHOE_CODE_COLOR_LENGTH,
)
from shoetrack.errors import ValidationError, ConflictError
from shoetrack.services.db import fail, invalidate_dashboard
from shoetrack.modules.product.services import shoe_codes_in_use
from shoetrack.utils import clean_string, clean_string_upper, parse_positive_number, parse_positive_int, normalize_choice, now, require_object

def generate_shoe_code(prefix, size, color, index):
    """ML-SH, '40', 'Blue', 0 -> ML-SH-40-BLU-001"""
    if not prefix: return None
    size_code = clean_string(size).rjust(SHOE_CODE_SIZE_WIDTH, '0')
    color_code = clean_string_upper(color)[:SHOE_CODE_COLOR_LENGTH]
    sequence = str(index + 1).zfill(SHOE_CODE_SEQUENCE_WIDTH)
    return f"{clean_string(prefix)}-{size_code}-{color_code}-{sequence}"

def validate_bundle_request(data):
    """Checks a bundle request in a fixed order and returns the cleaned values.

    Order: name, price, selling price, pairs present, image, each pair,
    stock per item, categorical fields. The first failure is raised.
    """
    base_name = clean_string(data.get('baseName'))
    if not base_name:
        raise ValidationError('Bundle design name is required', 'baseName')

    price = parse_positive_number(data.get('price'), 'Valid purchase price is required', 'price')
    selling_price = parse_positive_number(data.get('sellingPrice'), 'Valid selling price is required', 'sellingPrice')

    pairs = data.get('shoePairs')
    if not pairs or not isinstance(pairs, list):
        raise ValidationError('At least one shoe pair is required', 'shoePairs')

    image_file = clean_string(data.get('imageFile'))
    if not image_file:
        raise ValidationError('Bundle image filename is required', 'imageFile')

    cleaned_pairs = []
    for i, pair in enumerate(pairs):
        pair = pair if isinstance(pair, dict) else {}
        size = clean_string(pair.get('size'))
        color = clean_string(pair.get('color'))
        if not size or not color:
            raise ValidationError(f'Each shoe must have both size and color (pair {i + 1})', 'shoePairs')
        cleaned_pairs.append({'size': size, 'color': color, 'shoeCode': clean_string(pair.get('shoeCode')) or None})

    stock_per_item = parse_positive_int(data.get('stockPerItem'), 'Stock per item must be a positive whole number', 'stockPerItem', default=1)

    return {
        'baseName': base_name,
        'description': clean_string(data.get('description')),
        'price': price,
        'sellingPrice': selling_price,
        'imageFile': image_file,
        'pairs': cleaned_pairs,
        'stockPerItem': stock_per_item,
        'genderCategory': normalize_choice(data.get('genderCategory'), GenderCategory, 'genderCategory'),
        'ageGroup': normalize_choice(data.get('ageGroup') or AgeGroup.ADULT, AgeGroup, 'ageGroup'),
        'condition': normalize_choice(data.get('condition'), Condition, 'condition'),
        'location': clean_string(data.get('location')),
        'notes': clean_string(data.get('notes')),
        'prefix': clean_string(data.get('bundleCodePrefix')) or current_app.config.get('SHOE_CODE_PREFIX'),
    }

def assign_shoe_codes(req):
    codes = [p['shoeCode'] or generate_shoe_code(req['prefix'], p['size'], p['color'], i) for i, p in enumerate(req['pairs'])]

    seen = {}
    clashes = []
    for i, code in enumerate(codes):
        if not code: continue
        if code in seen:
            clashes.extend([seen[code], i])
        seen.setdefault(code, i)
    taken = shoe_codes_in_use(codes)
    clashes.extend(i for i, code in enumerate(codes) if code in taken)

    if clashes:
        indices = sorted(set(clashes))
        dupes = sorted({codes[i] for i in indices})
        raise ConflictError(f"Shoe code(s) already in use: {', '.join(dupes)}", 'shoePairs', indices)
    return codes

def build_bundle_products(req, codes, bundle_id):
    created_at = now()
    products = []
    for pair, code in zip(req['pairs'], codes):
        products.append(Product(
            shoe_code=code,
            bundle_id=bundle_id,
            base_name=req['baseName'],
            name=f"{req['baseName']} - {pair['color']}",
            description=req['description'] or f"{pair['color']} {req['baseName']}",
            color=pair['color'],
            size=pair['size'],
            sizes=[pair['size']],
            gender_category=req['genderCategory'],
            age_group=req['ageGroup'],
            condition=req['condition'],
            location=req['location'],
            notes=req['notes'],
            image_file=req['imageFile'],
            price=req['price'],
            selling_price=req['sellingPrice'],
            expected_profit=req['sellingPrice'] - req['price'],
            stock_count=req['stockPerItem'],
            original_stock=req['stockPerItem'],
            is_sold=False,
            total_sales=0,
            actual_profit=0,
            last_sale_price=0,
            date_added=created_at,
        ))
    return products

def expand_bundle(data):
    """Returns (True, {count, bundleId, productIds, shoeCodes}) or (False, error)."""
    try:
        req = validate_bundle_request(require_object(data))
        codes = assign_shoe_codes(req)
        bundle_id = str(uuid.uuid4())

        products = build_bundle_products(req, codes, bundle_id)
        db.session.add_all(products)
        db.session.commit()
        invalidate_dashboard()

        current_app.logger.info(f"Bundle {bundle_id} created: {len(products)} products of '{req['baseName']}'")
        return True, {
            'count': len(products),
            'bundleId': bundle_id,
            'productIds': [p.id for p in products],
            'shoeCodes': codes,
        }
    except Exception as e:
        return False, fail(e, 'create bulk products')
