from rest_framework import serializers

from .models import TimelinePost
from .tagging import default_tagger


class TimelinePostSerializer(serializers.ModelSerializer):
    author_name = serializers.SerializerMethodField()
    tag = serializers.SerializerMethodField()

    class Meta:
        model = TimelinePost
        fields = ['id', 'store', 'author', 'author_name', 'content',
                  'image_url', 'post_type', 'tag', 'created_at']
        read_only_fields = ['id', 'author', 'author_name', 'tag', 'created_at']

    def get_author_name(self, obj):
        if not obj.author:
            return None
        membership = obj.author.memberships.filter(store_id=obj.store_id).first()
        return (membership and membership.alias) or str(obj.author)

    def get_tag(self, obj):
        return default_tagger.tag(obj.content)

    def validate_content(self, value):
        if not value.strip():
            raise serializers.ValidationError("Content cannot be empty")
        return value
