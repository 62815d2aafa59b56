from shoetrack.extensions import celery
from shoetrack.modules.sales.services import reconcile_sales_ledger

@celery.task(bind=True)
def task_reconcile_ledger(self):
    ok, res = reconcile_sales_ledger()
    if not ok:
        return {'status': 'error', 'message': res.message}

    found = len(res['mismatches'])
    return {
        'status': 'completed',
        'result': {
            'message': f"Ledger checked: {res['checked']} products, {found} mismatched",
            'details': res['mismatches']
        }
    }
