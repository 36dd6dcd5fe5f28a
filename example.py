"""Example usage of the record_attributes library."""

from record_attributes import (
    Attribute,
    AttributeFlag,
    DataGrid,
    DataGridSummary,
    EntityType,
    ExpressionAttribute,
    FieldSet,
    NumberAttribute,
    SearchType,
)

# Define an entity type with stored columns, a computed column and a fieldset
customer = EntityType("customer", table="customers", module="crm")
customer.add(NumberAttribute("id", AttributeFlag.PRIMARY | AttributeFlag.HIDE))
customer.add(Attribute("name", AttributeFlag.OBLIGATORY))
customer.add(Attribute("street"))
customer.add(Attribute("city"))
customer.add(
    ExpressionAttribute(
        "order_count",
        "SELECT COUNT(*) FROM orders WHERE orders.customer_id = [table].id",
        SearchType.NUMBER,
    )
)
customer.add(FieldSet("address", "[street], [city]"))
customer.init()

query = customer.build_select_query()
query.add_order_by(customer.order_by("order_count", "DESC"))
customer.search_query({"order_count": "5/10", "name": "ann"}, query=query)
query.set_limit(10, 10)

print("Query:")
print(f"  {query.build_select()}")

record = {"id": 1, "name": "Ann", "street": "Main Street 1", "city": "Springfield", "order_count": 7}

print("\nView:")
for name, html in customer.render_view(record).items():
    print(f"  {name}: {html}")

print("\nEdit:")
for name, html in customer.render_edit(record).items():
    print(f"  {name}: {html}")

print("\nSummary:")
print(f"  {DataGridSummary(DataGrid(limit=10, count=25, offset=10)).render()}")
