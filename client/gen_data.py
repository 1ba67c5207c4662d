# client/gen_data.py
import random
from datetime import date

PRODUCTS = ["Demo product", "T-shirt", "Mug", "Poster", "Hoodie", "Sticker pack"]

def gen_demo_order():
    """A throwaway order for the "Add order" button."""
    qty = random.randint(1, 3)
    return {
        "customerName": f"New customer {random.randint(0, 99)}",
        "productName": random.choice(PRODUCTS),
        "quantity": qty,
        "totalAmount": 500000 * qty,
        "status": "Chờ xử lý",
        "date": date.today().isoformat(),
    }
