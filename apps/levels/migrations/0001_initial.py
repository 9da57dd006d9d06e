from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='CategoriaEdad',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('nombre', models.CharField(max_length=50, unique=True)),
                ('edad_min', models.PositiveIntegerField(blank=True, null=True)),
                ('edad_max', models.PositiveIntegerField(blank=True, null=True)),
                ('precio_mensualidad', models.DecimalField(blank=True, decimal_places=2, max_digits=10, null=True)),
                ('orden', models.PositiveIntegerField(default=0)),
                ('es_demo', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Categoría de edad',
                'verbose_name_plural': 'Categorías de edad',
                'db_table': 'categoria_edad',
                'ordering': ['orden', 'edad_min', 'id'],
            },
        ),
        migrations.CreateModel(
            name='Cinta',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('nombre', models.CharField(max_length=50, unique=True)),
                ('nombre_en', models.CharField(blank=True, default='', max_length=50)),
                ('color_hex', models.CharField(default='#FFFFFF', max_length=7)),
                ('orden', models.PositiveIntegerField(default=1)),
                ('es_dan', models.BooleanField(default=False)),
                ('nivel_dan', models.PositiveIntegerField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'verbose_name': 'Cinta',
                'verbose_name_plural': 'Cintas',
                'db_table': 'cinta',
                'ordering': ['orden', 'id'],
            },
        ),
    ]
