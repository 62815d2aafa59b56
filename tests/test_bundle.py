import pytest
from shoetrack.models import Product
from shoetrack.errors import ValidationError, ConflictError
from shoetrack.modules.product.bundle_services import expand_bundle, generate_shoe_code


def bundle_request(**overrides):
    data = {
        'baseName': 'Classic',
        'price': 40,
        'sellingPrice': 80,
        'genderCategory': 'male',
        'ageGroup': 'adult',
        'imageFile': 'classic.jpg',
        'stockPerItem': 2,
        'shoePairs': [{'size': '40', 'color': 'Black'}, {'size': '41', 'color': 'Black'}],
    }
    data.update(overrides)
    return data


def test_generate_shoe_code():
    assert generate_shoe_code('ML-SH', '40', 'Blue', 0) == 'ML-SH-40-BLU-001'
    assert generate_shoe_code('CH-SH', '9', 'red', 11) == 'CH-SH-09-RED-012'
    assert generate_shoe_code(None, '40', 'Blue', 0) is None


def test_expand_classic_bundle(app):
    ok, res = expand_bundle(bundle_request())
    assert ok
    assert res['count'] == 2

    products = Product.query.filter_by(bundle_id=res['bundleId']).order_by(Product.id).all()
    assert len(products) == 2
    assert [p.id for p in products] == res['productIds']
    for p in products:
        assert p.stock_count == 2
        assert p.original_stock == 2
        assert p.expected_profit == 40
        assert p.price == 40 and p.selling_price == 80
        assert p.image_file == 'classic.jpg'
        assert p.base_name == 'Classic'
        assert p.name == 'Classic - Black'
        assert p.description == 'Black Classic'
        assert p.total_sales == 0 and p.actual_profit == 0
        assert p.is_sold is False and p.date_sold is None
    assert [p.size for p in products] == ['40', '41']
    assert products[0].sizes == ['40']


def test_bundle_ids_are_unique_per_request(app):
    _, first = expand_bundle(bundle_request())
    _, second = expand_bundle(bundle_request())
    assert first['bundleId'] != second['bundleId']
    assert Product.query.count() == 4


def test_description_and_default_stock(app):
    data = bundle_request(description='  Leather upper ')
    del data['stockPerItem']
    ok, res = expand_bundle(data)
    assert ok
    for p in Product.query.all():
        assert p.description == 'Leather upper'
        assert p.stock_count == 1


@pytest.mark.parametrize('overrides, field', [
    ({'baseName': '   '}, 'baseName'),
    ({'baseName': '', 'price': 0}, 'baseName'),
    ({'price': 0, 'sellingPrice': -1}, 'price'),
    ({'price': 'abc'}, 'price'),
    ({'price': 'inf'}, 'price'),
    ({'sellingPrice': float('inf')}, 'sellingPrice'),
    ({'sellingPrice': 0, 'shoePairs': []}, 'sellingPrice'),
    ({'shoePairs': [], 'imageFile': ''}, 'shoePairs'),
    ({'imageFile': '', 'shoePairs': [{'size': '', 'color': 'Red'}]}, 'imageFile'),
    ({'shoePairs': [{'size': '40', 'color': 'Red'}, {'size': '41'}]}, 'shoePairs'),
    ({'stockPerItem': 0}, 'stockPerItem'),
    ({'stockPerItem': 1.5}, 'stockPerItem'),
    ({'genderCategory': 'other'}, 'genderCategory'),
])
def test_validation_order(app, overrides, field):
    ok, err = expand_bundle(bundle_request(**overrides))
    assert not ok
    assert isinstance(err, ValidationError)
    assert err.field == field
    assert Product.query.count() == 0


def test_pair_missing_color_rejects_whole_batch(app):
    pairs = [{'size': '40', 'color': 'Black'}, {'size': '41', 'color': 'Brown'}, {'size': '42', 'color': ''}]
    ok, err = expand_bundle(bundle_request(shoePairs=pairs))
    assert not ok
    assert 'pair 3' in err.message
    assert Product.query.count() == 0


def test_categories_are_normalized(app):
    ok, _ = expand_bundle(bundle_request(genderCategory='Women', ageGroup='children'))
    assert ok
    p = Product.query.first()
    assert p.gender_category == 'female'
    assert p.age_group == 'child'


def test_age_group_defaults_to_adult(app):
    data = bundle_request()
    del data['ageGroup']
    expand_bundle(data)
    assert {p.age_group for p in Product.query.all()} == {'adult'}


def test_shoe_codes_from_prefix(app):
    pairs = [{'size': '40', 'color': 'Blue'}, {'size': '40', 'color': 'Blue'}, {'size': '9', 'color': 'White'}]
    ok, res = expand_bundle(bundle_request(bundleCodePrefix='ML-SH', shoePairs=pairs))
    assert ok
    assert res['shoeCodes'] == ['ML-SH-40-BLU-001', 'ML-SH-40-BLU-002', 'ML-SH-09-WHI-003']
    codes = sorted(p.shoe_code for p in Product.query.all())
    assert codes == sorted(res['shoeCodes'])


def test_shoe_codes_from_configured_prefix(app):
    app.config['SHOE_CODE_PREFIX'] = 'FM-SH'
    ok, res = expand_bundle(bundle_request())
    assert ok
    assert res['shoeCodes'] == ['FM-SH-40-BLA-001', 'FM-SH-41-BLA-002']


def test_no_prefix_means_no_codes(app):
    ok, res = expand_bundle(bundle_request())
    assert ok
    assert res['shoeCodes'] == [None, None]


def test_explicit_pair_code_wins(app):
    pairs = [{'size': '40', 'color': 'Blue', 'shoeCode': 'SH-FZ-001'}, {'size': '41', 'color': 'Blue'}]
    ok, res = expand_bundle(bundle_request(bundleCodePrefix='ML-SH', shoePairs=pairs))
    assert ok
    assert res['shoeCodes'] == ['SH-FZ-001', 'ML-SH-41-BLU-002']


def test_duplicate_codes_inside_batch_rejected(app):
    pairs = [{'size': '40', 'color': 'Blue', 'shoeCode': 'X-1'}, {'size': '41', 'color': 'Red'}, {'size': '42', 'color': 'Tan', 'shoeCode': 'X-1'}]
    ok, err = expand_bundle(bundle_request(shoePairs=pairs))
    assert not ok
    assert isinstance(err, ConflictError)
    assert err.indices == [0, 2]
    assert Product.query.count() == 0


def test_code_collision_with_existing_products_rejects_batch(app):
    ok, _ = expand_bundle(bundle_request(bundleCodePrefix='ML-SH'))
    assert ok
    # Same prefix and pair order regenerate the same codes.
    ok, err = expand_bundle(bundle_request(bundleCodePrefix='ML-SH', baseName='Classic II'))
    assert not ok
    assert isinstance(err, ConflictError)
    assert err.indices == [0, 1]
    assert Product.query.count() == 2
    assert Product.query.filter_by(base_name='Classic II').count() == 0
