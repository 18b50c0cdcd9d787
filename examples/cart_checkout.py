from bindery import Binding, ReactiveStore


# Define a store for a shopping cart
class Cart(ReactiveStore):
    defaults = {"item_count": 1, "price_per_item": 10.0}


class Display:
    def update_ui(self, total: float):
        print(f">>> Cart Total: ${total:.2f}")


cart = Cart()
display = Display()

# Recompute the total whenever either key changes and hand it to the UI.
Binding(
    [
        [cart, "item_count", cart, "price_per_item"],  # triggers
        [cart, "item_count", cart, "price_per_item"],  # sources
        [lambda values: values[0] * values[1]],  # modifiers
        [display, "update_ui"],  # destinations
    ]
)

print("=" * 50)

cart.item_count = 2
cart.price_per_item = 15

# ==================================================
# >>> Cart Total: $20.00
# >>> Cart Total: $30.00
