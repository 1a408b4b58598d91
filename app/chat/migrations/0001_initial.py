import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):
    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Conversation",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        default=django.utils.timezone.now,
                        editable=False,
                        db_index=True,
                        help_text="Timestamp when this record was created",
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(
                        default=django.utils.timezone.now,
                        editable=False,
                        help_text="Timestamp when this record was last modified",
                    ),
                ),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("active", "Active"),
                            ("ended", "Ended"),
                            ("blocked", "Blocked"),
                        ],
                        db_index=True,
                        default="active",
                        help_text="Lifecycle status of the conversation",
                        max_length=10,
                    ),
                ),
                (
                    "started_at",
                    models.DateTimeField(
                        blank=True,
                        help_text="When the conversation was first activated",
                        null=True,
                    ),
                ),
                (
                    "ended_at",
                    models.DateTimeField(
                        blank=True,
                        help_text="When the conversation last entered the ended status",
                        null=True,
                    ),
                ),
                (
                    "superstar",
                    models.ForeignKey(
                        help_text="Superstar account participating in this conversation",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="superstar_conversations",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        help_text="Fan account participating in this conversation",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="user_conversations",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "chat_conversation",
                "ordering": ["-updated_at", "-id"],
                "indexes": [
                    models.Index(
                        fields=["user", "-updated_at"],
                        name="chat_conv_user_updated_idx",
                    ),
                    models.Index(
                        fields=["superstar", "-updated_at"],
                        name="chat_conv_star_updated_idx",
                    ),
                    models.Index(
                        fields=["user", "superstar", "-created_at"],
                        name="chat_conv_pair_idx",
                    ),
                ],
            },
        ),
        migrations.CreateModel(
            name="Message",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        default=django.utils.timezone.now,
                        editable=False,
                        db_index=True,
                        help_text="Timestamp when this record was created",
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(
                        default=django.utils.timezone.now,
                        editable=False,
                        help_text="Timestamp when this record was last modified",
                    ),
                ),
                (
                    "sender_type",
                    models.CharField(
                        choices=[("user", "User"), ("superstar", "Superstar")],
                        help_text="Role of the sender (user or superstar)",
                        max_length=10,
                    ),
                ),
                (
                    "message_type",
                    models.CharField(
                        choices=[
                            ("text", "Text"),
                            ("image", "Image"),
                            ("video", "Video"),
                            ("file", "File"),
                        ],
                        default="text",
                        help_text="Kind of content (text, image, video, file)",
                        max_length=10,
                    ),
                ),
                (
                    "message",
                    models.TextField(
                        blank=True,
                        help_text="Text body; may be empty when an attachment is present",
                        null=True,
                    ),
                ),
                (
                    "file_path",
                    models.CharField(
                        blank=True,
                        help_text="Storage path of the attachment",
                        max_length=255,
                        null=True,
                    ),
                ),
                (
                    "file_name",
                    models.CharField(
                        blank=True,
                        help_text="Original file name of the attachment",
                        max_length=255,
                        null=True,
                    ),
                ),
                (
                    "file_size",
                    models.PositiveBigIntegerField(
                        blank=True,
                        help_text="Attachment size in bytes",
                        null=True,
                    ),
                ),
                (
                    "is_read",
                    models.BooleanField(
                        default=False,
                        help_text="Whether the recipient has read this message",
                    ),
                ),
                (
                    "read_at",
                    models.DateTimeField(
                        blank=True,
                        help_text="When the recipient marked this message as read",
                        null=True,
                    ),
                ),
                (
                    "conversation",
                    models.ForeignKey(
                        help_text="Conversation this message belongs to",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="messages",
                        to="chat.conversation",
                    ),
                ),
                (
                    "sender",
                    models.ForeignKey(
                        help_text="Account that sent this message",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="sent_messages",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "db_table": "chat_message",
                "ordering": ["created_at", "id"],
                "indexes": [
                    models.Index(
                        fields=["conversation", "-created_at", "-id"],
                        name="chat_msg_conv_recent_idx",
                    ),
                    models.Index(
                        condition=models.Q(("is_read", False)),
                        fields=["conversation", "sender_type"],
                        name="chat_msg_unread_idx",
                    ),
                    models.Index(
                        fields=["sender", "sender_type"],
                        name="chat_msg_sender_idx",
                    ),
                ],
                "constraints": [
                    models.CheckConstraint(
                        condition=models.Q(
                            ("message__isnull", False),
                            ("file_path__isnull", False),
                            _connector="OR",
                        ),
                        name="chat_msg_has_content",
                    ),
                    models.CheckConstraint(
                        condition=models.Q(
                            ("is_read", True),
                            ("read_at__isnull", True),
                            _connector="OR",
                        ),
                        name="chat_msg_unread_has_no_read_at",
                    ),
                ],
            },
        ),
    ]
