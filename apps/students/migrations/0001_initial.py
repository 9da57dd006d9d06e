from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('levels', '0001_initial'),
        ('guardians', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Alumno',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('cedula', models.CharField(max_length=20, unique=True)),
                ('nombre', models.CharField(max_length=100)),
                ('fecha_nacimiento', models.DateField()),
                ('telefono', models.CharField(blank=True, default='', max_length=20)),
                ('email', models.EmailField(blank=True, default='', max_length=254)),
                ('direccion', models.CharField(blank=True, default='', max_length=255)),
                ('contacto_emergencia', models.CharField(blank=True, default='', max_length=100)),
                ('telefono_emergencia', models.CharField(blank=True, default='', max_length=20)),
                ('nombre_padre', models.CharField(blank=True, default='', max_length=100)),
                ('telefono_padre', models.CharField(blank=True, default='', max_length=20)),
                ('nombre_madre', models.CharField(blank=True, default='', max_length=100)),
                ('telefono_madre', models.CharField(blank=True, default='', max_length=20)),
                ('activo', models.BooleanField(default=True)),
                ('eliminado', models.BooleanField(default=False)),
                ('fecha_eliminacion', models.DateTimeField(blank=True, null=True)),
                ('es_demo', models.BooleanField(default=False)),
                ('fecha_inscripcion', models.DateField(auto_now_add=True)),
                ('tiempo_preparacion_meses', models.PositiveSmallIntegerField(blank=True, null=True)),
                ('proximo_examen_fecha', models.DateField(blank=True, null=True)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('categoria_edad', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='alumnos', to='levels.categoriaedad')),
                ('cinta', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='alumnos', to='levels.cinta')),
                ('sensei', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='alumnos_a_cargo', to=settings.AUTH_USER_MODEL)),
                ('usuario', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='alumnos', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Alumno',
                'verbose_name_plural': 'Alumnos',
                'db_table': 'alumno',
                'ordering': ['nombre'],
            },
        ),
        migrations.CreateModel(
            name='AlumnoRepresentante',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('parentesco', models.CharField(choices=[('PADRE', 'Padre'), ('MADRE', 'Madre'), ('ABUELO', 'Abuelo'), ('ABUELA', 'Abuela'), ('TIO', 'Tío'), ('TIA', 'Tía'), ('HERMANO', 'Hermano'), ('HERMANA', 'Hermana'), ('TUTOR_LEGAL', 'Tutor Legal'), ('OTRO', 'Otro')], default='OTRO', max_length=20)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('alumno', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='representantes', to='students.alumno')),
                ('representante', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='alumnos_representados', to='guardians.representante')),
            ],
            options={
                'verbose_name': 'Relación Alumno-Representante',
                'verbose_name_plural': 'Relaciones Alumno-Representante',
                'db_table': 'alumno_representante',
                'unique_together': {('alumno', 'representante')},
            },
        ),
    ]
