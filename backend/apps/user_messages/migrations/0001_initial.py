# Generated migration for user_messages app (MySQL compatible)

from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('authentication', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='UserMessage',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('content', models.TextField()),
                ('is_read', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('receiver', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='received_user_messages', to='authentication.user')),
                ('sender', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='sent_user_messages', to='authentication.user')),
            ],
            options={
                'db_table': 'user_messages',
                'ordering': ['created_at'],
                'indexes': [
                    models.Index(fields=['receiver', 'is_read'], name='user_msgs_unread_idx'),
                    models.Index(fields=['sender', 'receiver', 'created_at'], name='user_msgs_thread_idx'),
                ],
            },
        ),
    ]
