"""Vendor field candidates — ordered key lists per logical field.

The vendor API is loosely typed and inconsistent about casing and naming,
so every logical field is looked up through an ordered tuple of candidate
keys. The first present key wins (see utils.first_present).

Called by: connectors/vendor.py
"""

AUTH_TOKEN = ("access_token", "token", "AccessToken")

LISTING_WRAPPERS = ("Data", "data", "Items", "items", "Result", "result")

PRODUCT = {
    "id": ("SimpleCode", "FullCode", "id", "Id"),
    "name": ("Name", "name"),
    "description": ("Description", "LongDescription", "description"),
    "price": ("Price", "UnitPrice", "price"),
    "category": ("Category", "CategoryName", "category"),
    "brand": ("Brand", "BrandName", "brand"),
    "images": ("Images", "images"),
    "image": ("Image", "image"),
    "variants": ("Variants", "variants"),
    "branding_options": ("BrandingOptions", "brandingOptions"),
    "specifications": ("Specifications", "specifications"),
    "minimum_order": ("MinimumOrderQuantity", "MOQ", "minimumOrder"),
}

VARIANT = {
    "color": ("color", "Color", "Colour", "ColourName"),
    "sizes": ("sizes", "Sizes"),
    "stock": ("stock", "Stock", "StockQuantity"),
}

BRANDING_OPTION = {
    "method": ("method", "Method", "BrandingMethod", "Name"),
    "cost": ("cost", "Cost", "Price"),
    "setup_fee": ("setupFee", "SetupFee"),
    "minimum_quantity": ("minimumQuantity", "MinimumQuantity"),
}

CATEGORY = {
    "id": ("CategoryCode", "id", "Id"),
    "name": ("CategoryName", "name", "Name"),
    "description": ("Description", "description"),
    "parent_id": ("ParentCategoryCode", "parentId"),
    "image_url": ("ImageUrl", "Image", "imageUrl"),
    "sort_order": ("SortOrder", "sortOrder"),
}

BRANDING_METHOD = {
    "id": ("BrandingCode", "id", "Id"),
    "name": ("BrandingMethodName", "name", "Name"),
    "description": ("Description", "description"),
    "base_cost": ("BaseCost", "baseCost"),
    "color_upcharge": ("ColorUpcharge", "colorUpcharge"),
    "setup_fee": ("SetupFee", "setupFee"),
    "minimum_quantity": ("MinimumQuantity", "minimumQuantity"),
}
