from stadium_orders.schemas.order import CartLine, OrderCreate

BURGER_ID = 1  # 8.50
HOT_DOG_ID = 2  # 6.00
FRIES_ID = 3  # 4.50
SECTION_A_ID = 1
SECTION_D_ID = 4  # delivery unavailable


def pickup(*lines, guest_name=None):
    lines = lines or ((BURGER_ID, 2),)
    return OrderCreate(
        items=[CartLine(product_id=p, quantity=q) for p, q in lines],
        type="pickup",
        guest_name=guest_name,
    )


def delivery(*lines, section_id=SECTION_A_ID, row="12", seat="5"):
    lines = lines or ((BURGER_ID, 2),)
    return OrderCreate(
        items=[CartLine(product_id=p, quantity=q) for p, q in lines],
        type="delivery",
        section_id=section_id,
        row=row,
        seat=seat,
    )
