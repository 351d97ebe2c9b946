# Generated migration for announcements app (MySQL compatible)

from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('authentication', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Announcement',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=200)),
                ('content', models.JSONField()),
                ('image_url', models.CharField(blank=True, max_length=500, null=True)),
                ('summary', models.CharField(blank=True, max_length=500, null=True)),
                ('link_url', models.CharField(blank=True, max_length=500, null=True)),
                ('show_image', models.BooleanField(default=True)),
                ('show_summary', models.BooleanField(default=True)),
                ('show_link', models.BooleanField(default=False)),
                ('start_date', models.DateTimeField()),
                ('end_date', models.DateTimeField()),
                ('is_active', models.BooleanField(default=True)),
                ('priority', models.IntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'announcements',
                'ordering': ['-priority', '-created_at'],
                'indexes': [
                    models.Index(fields=['is_active', 'start_date', 'end_date'], name='announcements_live_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='AnnouncementView',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('view_date', models.DateField()),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('announcement', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='views', to='announcements.announcement')),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='announcement_views', to='authentication.user')),
            ],
            options={
                'db_table': 'announcement_views',
                'constraints': [
                    models.UniqueConstraint(fields=('user', 'announcement', 'view_date'), name='uniq_announcement_view'),
                ],
            },
        ),
    ]
