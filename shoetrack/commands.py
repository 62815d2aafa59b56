import click
from flask.cli import with_appcontext
from .extensions import db
from .models import Product, Sale
from .services.db import invalidate_dashboard
from .modules.sales.services import reconcile_sales_ledger

@click.command("init-db")
@with_appcontext
def init_db_command():
    print("Dropping all tables...")
    db.drop_all()
    print("Creating all tables...")
    db.create_all()
    print("✅ All tables re-created (all data deleted).")

@click.command("update-db")
@with_appcontext
def update_db_command():
    print("Checking and creating missing tables...")
    db.create_all()
    print("✅ Database updated (missing tables created).")

@click.command("reset-products")
@click.option("--yes", is_flag=True, help="Skip the confirmation prompt.")
@with_appcontext
def reset_products_command(yes):
    if not yes:
        click.confirm("Delete every product and sale record?", abort=True)
    try:
        sales = db.session.query(Sale).delete()
        products = db.session.query(Product).delete()
        db.session.commit()
        invalidate_dashboard()
        print(f"✅ Deleted {products} products and {sales} sale records.")
    except Exception as e:
        db.session.rollback()
        print(f"❌ Reset failed: {e}")

@click.command("verify-ledger")
@with_appcontext
def verify_ledger_command():
    ok, res = reconcile_sales_ledger()
    if not ok:
        print(f"❌ Ledger check failed: {res.message}")
        raise SystemExit(1)

    print(f"Checked {res['checked']} products.")
    for m in res['mismatches']:
        print(f"  #{m['productId']} {m['name']}: {'; '.join(m['issues'])}")
    if res['mismatches']:
        print(f"❌ {len(res['mismatches'])} product(s) out of step with their sale history.")
        raise SystemExit(1)
    print("✅ Every product reconciles with its sale history.")
