from rest_framework import serializers

from classifieds.models import (
    Category,
    Listing,
    ListingImage,
    ListingSort,
)


class BlankableDecimalField(serializers.DecimalField):
    """Decimal field that reads an empty form value as "no value"."""

    def validate_empty_values(self, data):
        if isinstance(data, str) and not data.strip():
            data = None
        return super().validate_empty_values(data)


class ListingContentSerializer(serializers.Serializer):
    """
    Validates the owner-supplied fields of a listing.

    Used for submission and, with ``partial=True``, for edits. Only the
    fields declared here can be written by an owner.
    """

    title = serializers.CharField(max_length=200)
    description = serializers.CharField()
    category_id = serializers.IntegerField()
    category_name = serializers.CharField(
        required=False, allow_blank=True, write_only=True
    )
    price = BlankableDecimalField(
        max_digits=10,
        decimal_places=2,
        min_value=0,
        required=False,
        allow_null=True,
    )
    location = serializers.CharField(max_length=200)
    contact_phone = serializers.CharField(
        max_length=20, required=False, allow_blank=True, allow_null=True
    )
    contact_email = serializers.EmailField(
        max_length=100, required=False, allow_blank=True, allow_null=True
    )

    def validate_category_id(self, value):
        category = Category.objects.filter(category_id=value, is_active=True).first()
        if category is None:
            raise serializers.ValidationError("Category does not exist.")
        self._category = category
        return value

    def validate(self, data):
        if "category_id" in data:
            data["category"] = self._category
        return data


class ListingUpdateSerializer(ListingContentSerializer):
    is_active = serializers.BooleanField(required=False)


class ListingSearchSerializer(serializers.Serializer):
    """Query-string parameters of the public listing search."""

    category_id = serializers.IntegerField(required=False)
    category = serializers.SlugField(required=False)
    location = serializers.CharField(required=False, allow_blank=True)
    min_price = serializers.DecimalField(
        max_digits=10, decimal_places=2, required=False, min_value=0
    )
    max_price = serializers.DecimalField(
        max_digits=10, decimal_places=2, required=False, min_value=0
    )
    search = serializers.CharField(required=False, allow_blank=True)
    sort_by = serializers.ChoiceField(
        choices=ListingSort.values(),
        required=False,
        default=ListingSort.NEWEST.value,
    )
    limit = serializers.IntegerField(
        required=False, default=20, min_value=1, max_value=100
    )
    offset = serializers.IntegerField(required=False, default=0, min_value=0)

    def validate(self, data):
        min_price = data.get("min_price")
        max_price = data.get("max_price")
        if min_price is not None and max_price is not None and min_price > max_price:
            raise serializers.ValidationError(
                {"max_price": "max_price must not be lower than min_price."}
            )
        return data


class CategorySummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = Category
        fields = ["category_id", "name", "slug", "icon"]


class CategorySerializer(serializers.ModelSerializer):
    listing_count = serializers.IntegerField(read_only=True, default=0)

    class Meta:
        model = Category
        fields = [
            "category_id",
            "name",
            "slug",
            "icon",
            "description",
            "sort_order",
            "listing_count",
        ]


class ListingImageSerializer(serializers.ModelSerializer):
    image_url = serializers.CharField(read_only=True)

    class Meta:
        model = ListingImage
        fields = ["image_id", "image_url", "alt_text", "sort_order"]


class ListingSerializer(serializers.ModelSerializer):
    """
    Read representation of a listing.

    Pass ``favorite_ids`` in the context to fill ``is_favorited``.
    """

    category = CategorySummarySerializer(read_only=True)
    images = ListingImageSerializer(many=True, read_only=True)
    is_favorited = serializers.SerializerMethodField()

    class Meta:
        model = Listing
        fields = [
            "listing_id",
            "user_id",
            "category_id",
            "category",
            "title",
            "description",
            "price",
            "location",
            "contact_phone",
            "contact_email",
            "is_active",
            "is_approved",
            "is_featured",
            "moderation_status",
            "moderation_notes",
            "view_count",
            "published_at",
            "created_at",
            "updated_at",
            "images",
            "is_favorited",
        ]
        read_only_fields = fields

    def get_is_favorited(self, obj):
        favorite_ids = self.context.get("favorite_ids")
        if favorite_ids is None:
            return False
        return obj.listing_id in favorite_ids
