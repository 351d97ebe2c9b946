# Generated migration for spirit_posts app (MySQL compatible)

from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('authentication', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='SpiritPost',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=200)),
                ('content', models.TextField()),
                ('is_hidden', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='spirit_posts', to='authentication.user')),
            ],
            options={
                'db_table': 'spirit_posts',
                'ordering': ['-created_at'],
            },
        ),
        migrations.AddIndex(
            model_name='spiritpost',
            index=models.Index(fields=['is_hidden', 'created_at'], name='spirit_posts_hidden_idx'),
        ),
        migrations.CreateModel(
            name='SpiritPostClaim',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('is_completed', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('post', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='claims', to='spirit_posts.spiritpost')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='spirit_post_claims', to='authentication.user')),
            ],
            options={
                'db_table': 'spirit_post_claims',
                'ordering': ['-created_at'],
            },
        ),
        migrations.AddConstraint(
            model_name='spiritpostclaim',
            constraint=models.UniqueConstraint(fields=('post', 'user'), name='uniq_spirit_post_claim'),
        ),
        migrations.CreateModel(
            name='SpiritPostMessage',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('content', models.TextField()),
                ('is_read', models.BooleanField(default=False)),
                ('read_at', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('post', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='messages', to='spirit_posts.spiritpost')),
                ('receiver', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='received_spirit_messages', to='authentication.user')),
                ('sender', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='sent_spirit_messages', to='authentication.user')),
            ],
            options={
                'db_table': 'spirit_post_messages',
                'ordering': ['created_at'],
            },
        ),
        migrations.AddIndex(
            model_name='spiritpostmessage',
            index=models.Index(fields=['post', 'receiver', 'is_read'], name='spirit_msg_unread_idx'),
        ),
    ]
