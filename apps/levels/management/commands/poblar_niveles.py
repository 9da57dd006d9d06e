from django.core.management.base import BaseCommand
from apps.levels.models import CategoriaEdad, Cinta
from apps.levels.services import CINTAS_BASE

# nombre, edad mínima, edad máxima (None = sin tope)
CATEGORIAS_BASE = [
    ('Benjamín', 0, 7),
    ('Alevín', 8, 9),
    ('Infantil', 10, 11),
    ('Cadete', 12, 13),
    ('Junior', 14, 15),
    ('Senior', 16, 34),
    ('Veterano', 35, None),
]


def poblar_niveles(es_demo=False):
    """Crea las categorías y cintas que falten. Devuelve (categorias, cintas) creadas"""
    categorias_creadas = []
    for orden, (nombre, edad_min, edad_max) in enumerate(CATEGORIAS_BASE, start=1):
        categoria, created = CategoriaEdad.objects.get_or_create(
            nombre=nombre,
            defaults={'edad_min': edad_min, 'edad_max': edad_max, 'orden': orden, 'es_demo': es_demo}
        )
        if created:
            categorias_creadas.append(categoria)

    cintas_creadas = []
    for nombre, nombre_en, color, orden in CINTAS_BASE:
        cinta, created = Cinta.objects.get_or_create(
            nombre=nombre,
            defaults={
                'nombre_en': nombre_en,
                'color_hex': color,
                'orden': orden,
                'es_dan': nombre == 'Negro',
                'nivel_dan': 1 if nombre == 'Negro' else None,
            }
        )
        if created:
            cintas_creadas.append(cinta)
    return categorias_creadas, cintas_creadas


class Command(BaseCommand):
    help = 'Crea las categorías de edad (Benjamín a Veterano) y las cintas (Blanco a Negro)'

    def handle(self, *args, **options):
        categorias, cintas = poblar_niveles()
        for categoria in categorias:
            self.stdout.write(self.style.SUCCESS(f'Categoría creada: {categoria}'))
        for cinta in cintas:
            self.stdout.write(self.style.SUCCESS(f'  Cinta creada: {cinta.nombre}'))
        self.stdout.write(self.style.SUCCESS(
            f'Total: {len(categorias)} categorías y {len(cintas)} cintas creadas'
        ))
