"""English message catalog."""

en = {
    "common": {
        "success": "Operation successful",
        "error": "An error occurred",
        "notFound": "Resource not found",
        "conflict": "Resource conflict",
        "unauthorized": "Unauthorized access",
        "forbidden": "Access forbidden",
        "validationError": "Validation error",
        "serverError": "Internal server error",
        "queryTimeout": "The request took too long to complete, please try again",
    },
    "auth": {
        "phoneAlreadyRegistered": "Phone number already registered",
        "emailAlreadyRegistered": "Email already registered",
        "userRegisteredSuccessfully": "User registered successfully",
        "invalidPhoneOrPassword": "Invalid phone number or password",
        "accountDeactivated": "Account is deactivated. Please contact support.",
        "loginSuccessful": "Login successful",
        "invalidToken": "Invalid token",
        "tokenExpired": "Token expired",
        "userNotFound": "User not found",
        "unauthorized": "Unauthorized. Please login first.",
        "adminAccessRequired": "Admin access required",
    },
    "product": {
        "productNotFound": "Product not found",
        "productCreated": "Product created successfully",
        "productUpdated": "Product updated successfully",
        "productDeleted": "Product deleted successfully",
        "outOfStock": "Product is out of stock",
        "insufficientStock": "Quantity exceeds available stock",
        "invalidCompareAtPrice": "Compare at price must be greater than or equal to the selling price",
        "skuExists": "A product with this SKU already exists",
        "slugExhausted": "Could not generate a unique slug for this product",
    },
    "cart": {
        "cartEmpty": "Cart is empty",
        "cartNotFound": "Cart not found",
        "itemNotFound": "Cart item not found",
        "itemAdded": "Item added to cart",
        "itemRemoved": "Item removed from cart",
        "itemUpdated": "Cart item updated",
        "cartCleared": "Cart cleared",
        "couponApplied": "Coupon applied",
        "couponRemoved": "Coupon removed",
    },
    "coupon": {
        "invalid": "Invalid coupon code",
    },
    "order": {
        "orderCreated": "Order created successfully",
        "orderNotFound": "Order not found",
        "orderCancelled": "Order cancelled successfully",
        "orderStatusUpdated": "Order status updated",
        "invalidOrderStatus": "Invalid order status",
        "cannotCancel": "Cannot cancel order at this stage",
        "emptyCart": "Cannot place an order with an empty cart",
        "addressNotFound": "Shipping address not found",
        "productNotFound": "A product in your cart no longer exists",
        "productOutOfStock": "{name} is out of stock",
    },
    "category": {
        "categoryNotFound": "Category not found",
        "categoryCreated": "Category created successfully",
        "categoryUpdated": "Category updated successfully",
        "categoryDeleted": "Category deleted successfully",
        "categoryActivated": "Category activated",
        "categoryDeactivated": "Category and its subcategories deactivated",
        "parentNotFound": "Parent category not found",
        "invalidPath": "Category path is empty",
        "nameExists": "A category with this name already exists",
        "circularReference": "A category cannot be moved under itself or one of its descendants",
        "hasChildren": "Cannot delete a category that has subcategories",
        "hasProducts": "Cannot delete a category that has products",
        "slugExhausted": "Could not generate a unique slug for this category",
    },
    "categoryAttribute": {
        "attributesSaved": "Category attributes saved",
        "attributesDeleted": "Category attributes deleted",
        "duplicateKey": "Attribute key '{key}' is defined more than once",
    },
    "favourite": {
        "added": "Product added to favourites",
        "removed": "Product removed from favourites",
        "cleared": "Favourites cleared",
        "notFound": "Favourites list not found",
    },
    "address": {
        "addressNotFound": "Address not found",
        "addressCreated": "Address created successfully",
        "addressUpdated": "Address updated successfully",
        "addressDeleted": "Address deleted successfully",
    },
}
