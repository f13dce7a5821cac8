"""Seed the content lists with sample rows for a fresh install."""

import asyncio
import sys

from sqlalchemy import select

sys.path.insert(0, ".")

from psisite.db import get_db_context, init_db
from psisite.models import FaqItem, Service, Specialty, Testimonial


async def seed_database():
    await init_db()

    async with get_db_context() as session:
        existing = await session.execute(select(Testimonial).limit(1))
        if existing.scalar_one_or_none():
            print("Content already seeded. Skipping.")
            return

        print("Seeding content...")

        session.add_all([
            Testimonial(
                name="Ana", service="Terapia individual", rating=5, order=0,
                testimonial="Me senti acolhida desde a primeira sessão.",
            ),
            Testimonial(
                name="Carlos", service="Terapia online", rating=5, order=1,
                testimonial="O atendimento online se encaixou perfeitamente na minha rotina.",
            ),
        ])
        session.add_all([
            Service(
                title="Terapia individual", icon="Brain", gradient="from-pink-500 to-purple-600", order=0,
                description="Sessões semanais focadas nas suas necessidades.",
                duration="50 minutos", show_duration=True,
            ),
            Service(
                title="Terapia online", icon="Video", gradient="from-blue-500 to-purple-600", order=1,
                description="Atendimento por videochamada com o mesmo cuidado do presencial.",
                duration="50 minutos", show_duration=True,
            ),
        ])
        session.add_all([
            Specialty(title="Ansiedade", description="Estratégias para lidar com preocupações e crises.", order=0),
            Specialty(
                title="Depressão", description="Acolhimento e acompanhamento contínuo.",
                icon="Heart", icon_color="#8b5cf6", order=1,
            ),
        ])
        session.add_all([
            FaqItem(
                question="Como funciona a primeira consulta?", order=0,
                answer="Conversamos sobre o que te trouxe até aqui e combinamos os próximos passos.",
            ),
            FaqItem(
                question="Atende por convênio?", order=1,
                answer="O atendimento é particular, com emissão de recibo para reembolso.",
            ),
        ])
        print("Seeding complete!")


if __name__ == "__main__":
    asyncio.run(seed_database())
