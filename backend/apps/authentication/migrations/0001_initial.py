# Generated migration for authentication app (MySQL compatible)

from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='User',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('username', models.CharField(max_length=50, unique=True)),
                ('email', models.EmailField(max_length=255, unique=True)),
                ('password_hash', models.CharField(max_length=255)),
                ('nickname', models.CharField(blank=True, default='', max_length=50)),
                ('avatar_url', models.CharField(blank=True, max_length=500, null=True)),
                ('role', models.CharField(choices=[('NORMAL', '普通用户'), ('PREMIUM', '黄金会员'), ('LIFETIME', '白金会员'), ('ADMIN', '管理员')], default='NORMAL', max_length=20)),
                ('status', models.CharField(choices=[('ACTIVE', '正常'), ('MUTED', '禁言'), ('BANNED', '封禁')], default='ACTIVE', max_length=20)),
                ('premium_expiry_date', models.DateTimeField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'db_table': 'users',
                'ordering': ['-created_at'],
            },
        ),
        migrations.AddIndex(
            model_name='user',
            index=models.Index(fields=['role'], name='users_role_idx'),
        ),
        migrations.AddIndex(
            model_name='user',
            index=models.Index(fields=['status'], name='users_status_idx'),
        ),
        migrations.CreateModel(
            name='RefreshToken',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('token', models.CharField(max_length=500)),
                ('expires_at', models.DateTimeField()),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('revoked_at', models.DateTimeField(blank=True, null=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='refresh_tokens', to='authentication.user')),
            ],
            options={
                'db_table': 'refresh_tokens',
                'ordering': ['-created_at'],
            },
        ),
        migrations.AddIndex(
            model_name='refreshtoken',
            index=models.Index(fields=['token'], name='refresh_tok_token_idx'),
        ),
        migrations.CreateModel(
            name='UserDailyLogin',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('login_date', models.DateField()),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='daily_logins', to='authentication.user')),
            ],
            options={
                'db_table': 'user_daily_logins',
                'ordering': ['-login_date'],
            },
        ),
        migrations.AddConstraint(
            model_name='userdailylogin',
            constraint=models.UniqueConstraint(fields=('user', 'login_date'), name='uniq_user_daily_login'),
        ),
    ]
