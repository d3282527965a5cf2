"""Arabic message catalog."""

ar = {
    "common": {
        "success": "تمت العملية بنجاح",
        "error": "حدث خطأ",
        "notFound": "المورد غير موجود",
        "conflict": "تعارض في البيانات",
        "unauthorized": "غير مصرح بالدخول",
        "forbidden": "الوصول ممنوع",
        "validationError": "خطأ في التحقق من الصحة",
        "serverError": "خطأ في الخادم الداخلي",
        "queryTimeout": "استغرق الطلب وقتاً طويلاً، يرجى المحاولة مرة أخرى",
    },
    "auth": {
        "phoneAlreadyRegistered": "رقم الهاتف مسجل بالفعل",
        "emailAlreadyRegistered": "البريد الإلكتروني مسجل بالفعل",
        "userRegisteredSuccessfully": "تم تسجيل المستخدم بنجاح",
        "invalidPhoneOrPassword": "رقم الهاتف أو كلمة المرور غير صحيحة",
        "accountDeactivated": "الحساب معطل. يرجى التواصل مع الدعم الفني.",
        "loginSuccessful": "تم تسجيل الدخول بنجاح",
        "invalidToken": "رمز وصول غير صالح",
        "tokenExpired": "انتهت صلاحية رمز الوصول",
        "userNotFound": "المستخدم غير موجود",
        "unauthorized": "غير مصرح. يرجى تسجيل الدخول أولاً.",
        "adminAccessRequired": "يتطلب صلاحيات المسؤول",
    },
    "product": {
        "productNotFound": "المنتج غير موجود",
        "productCreated": "تم إنشاء المنتج بنجاح",
        "productUpdated": "تم تحديث المنتج بنجاح",
        "productDeleted": "تم حذف المنتج بنجاح",
        "outOfStock": "المنتج غير متوفر في المخزون",
        "insufficientStock": "الكمية تتجاوز المخزون المتاح",
        "invalidCompareAtPrice": "يجب أن يكون سعر المقارنة أكبر من أو يساوي سعر البيع",
        "skuExists": "يوجد منتج بنفس رمز SKU",
        "slugExhausted": "تعذر إنشاء معرف فريد لهذا المنتج",
    },
    "cart": {
        "cartEmpty": "السلة فارغة",
        "cartNotFound": "السلة غير موجودة",
        "itemNotFound": "العنصر غير موجود في السلة",
        "itemAdded": "تمت إضافة المنتج إلى السلة",
        "itemRemoved": "تمت إزالة المنتج من السلة",
        "itemUpdated": "تم تحديث عنصر السلة",
        "cartCleared": "تم إفراغ السلة",
        "couponApplied": "تم تطبيق القسيمة",
        "couponRemoved": "تمت إزالة القسيمة",
    },
    "coupon": {
        "invalid": "رمز القسيمة غير صالح",
    },
    "order": {
        "orderCreated": "تم إنشاء الطلب بنجاح",
        "orderNotFound": "الطلب غير موجود",
        "orderCancelled": "تم إلغاء الطلب بنجاح",
        "orderStatusUpdated": "تم تحديث حالة الطلب",
        "invalidOrderStatus": "حالة الطلب غير صحيحة",
        "cannotCancel": "لا يمكن إلغاء الطلب في هذه المرحلة",
        "emptyCart": "لا يمكن إنشاء طلب بسلة فارغة",
        "addressNotFound": "عنوان الشحن غير موجود",
        "productNotFound": "أحد المنتجات في سلتك لم يعد موجوداً",
        "productOutOfStock": "{name} غير متوفر في المخزون",
    },
    "category": {
        "categoryNotFound": "الفئة غير موجودة",
        "categoryCreated": "تم إنشاء الفئة بنجاح",
        "categoryUpdated": "تم تحديث الفئة بنجاح",
        "categoryDeleted": "تم حذف الفئة بنجاح",
        "categoryActivated": "تم تفعيل الفئة",
        "categoryDeactivated": "تم تعطيل الفئة وفئاتها الفرعية",
        "parentNotFound": "الفئة الأم غير موجودة",
        "invalidPath": "مسار الفئة فارغ",
        "nameExists": "توجد فئة بنفس الاسم",
        "circularReference": "لا يمكن نقل الفئة تحت نفسها أو تحت إحدى فئاتها الفرعية",
        "hasChildren": "لا يمكن حذف فئة تحتوي على فئات فرعية",
        "hasProducts": "لا يمكن حذف فئة تحتوي على منتجات",
        "slugExhausted": "تعذر إنشاء معرف فريد لهذه الفئة",
    },
    "categoryAttribute": {
        "attributesSaved": "تم حفظ خصائص الفئة",
        "attributesDeleted": "تم حذف خصائص الفئة",
        "duplicateKey": "المفتاح '{key}' معرف أكثر من مرة",
    },
    "favourite": {
        "added": "تمت إضافة المنتج إلى المفضلة",
        "removed": "تمت إزالة المنتج من المفضلة",
        "cleared": "تم إفراغ المفضلة",
        "notFound": "قائمة المفضلة غير موجودة",
    },
    "address": {
        "addressNotFound": "العنوان غير موجود",
        "addressCreated": "تم إنشاء العنوان بنجاح",
        "addressUpdated": "تم تحديث العنوان بنجاح",
        "addressDeleted": "تم حذف العنوان بنجاح",
    },
}
