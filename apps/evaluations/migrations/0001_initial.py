from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
        ('students', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Evaluacion',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('nombre', models.CharField(max_length=150)),
                ('examen_tipo', models.CharField(blank=True, default='', max_length=30)),
                ('fecha', models.DateField()),
                ('hora', models.TimeField()),
                ('descripcion', models.TextField(blank=True, default='')),
                ('es_demo', models.BooleanField(default=False)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('instructor', models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name='evaluaciones_dirigidas', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Evaluación',
                'verbose_name_plural': 'Evaluaciones',
                'db_table': 'evaluacion',
                'ordering': ['-fecha', '-hora'],
            },
        ),
        migrations.CreateModel(
            name='AlumnoEvaluacion',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('notas', models.TextField(blank=True, default='')),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('alumno', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='inscripciones_examen', to='students.alumno')),
                ('evaluacion', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='inscripciones', to='evaluations.evaluacion')),
            ],
            options={
                'verbose_name': 'Alumno en evaluación',
                'verbose_name_plural': 'Alumnos en evaluación',
                'db_table': 'alumno_evaluacion',
                'unique_together': {('evaluacion', 'alumno')},
            },
        ),
        migrations.AddField(
            model_name='evaluacion',
            name='alumnos',
            field=models.ManyToManyField(related_name='evaluaciones', through='evaluations.AlumnoEvaluacion', to='students.alumno'),
        ),
    ]
