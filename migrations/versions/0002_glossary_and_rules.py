"""glossary terms, business rules, classifications and reference lists

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-18 15:00:00
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "0002"
down_revision: str | None = "0001"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

ENUM_LENGTH = 32


def _base_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True
        ),
        sa.Column(
            "updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True
        ),
    ]


def _fk(column: str, table: str, referred: str) -> sa.ForeignKeyConstraint:
    return sa.ForeignKeyConstraint(
        [column], [f"{referred}.id"], name=f"fk_{table}_{column}_{referred}"
    )


def upgrade() -> None:
    op.create_table(
        "definicao",
        *_base_columns(),
        sa.Column("nome", sa.String(255), nullable=False),
        sa.Column("descricao", sa.Text(), nullable=True),
        sa.Column("sigla", sa.String(50), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_definicao"),
        sa.UniqueConstraint("nome", name="uq_definicao_nome"),
    )
    op.create_table(
        "lista_referencia",
        *_base_columns(),
        sa.Column("nome", sa.String(255), nullable=False),
        sa.Column("descricao", sa.Text(), nullable=True),
        sa.Column("valores", sa.Text(), nullable=False),
        sa.Column("tabela_id", sa.Uuid(), nullable=True),
        sa.Column("coluna_id", sa.Uuid(), nullable=True),
        _fk("tabela_id", "lista_referencia", "tabela"),
        _fk("coluna_id", "lista_referencia", "coluna"),
        sa.PrimaryKeyConstraint("id", name="pk_lista_referencia"),
    )
    op.create_table(
        "regra_negocio",
        *_base_columns(),
        sa.Column("nome", sa.String(255), nullable=False),
        sa.Column("codigo", sa.String(50), nullable=False),
        sa.Column("descricao", sa.Text(), nullable=False),
        sa.Column("observacoes", sa.Text(), nullable=True),
        sa.Column("tipo_regra", sa.String(ENUM_LENGTH), nullable=False),
        sa.Column("prioridade", sa.String(ENUM_LENGTH), nullable=False),
        sa.Column("complexidade", sa.String(ENUM_LENGTH), nullable=False),
        sa.Column("processo_id", sa.Uuid(), nullable=False),
        sa.Column("sistema_id", sa.Uuid(), nullable=True),
        sa.Column("versao", sa.String(20), nullable=False),
        sa.Column("status", sa.String(ENUM_LENGTH), nullable=False),
        sa.Column("data_inicio_vigencia", sa.DateTime(timezone=True), nullable=True),
        sa.Column("data_fim_vigencia", sa.DateTime(timezone=True), nullable=True),
        sa.Column("ativo", sa.Boolean(), nullable=False),
        _fk("processo_id", "regra_negocio", "processo"),
        _fk("sistema_id", "regra_negocio", "sistema"),
        sa.PrimaryKeyConstraint("id", name="pk_regra_negocio"),
        sa.UniqueConstraint("codigo", name="uq_regra_negocio_codigo"),
    )
    op.create_table(
        "classificacao_informacao",
        *_base_columns(),
        sa.Column("nome", sa.String(255), nullable=False),
        sa.Column("descricao", sa.Text(), nullable=True),
        sa.Column("politica_id", sa.Uuid(), nullable=False),
        sa.Column("termo_id", sa.Uuid(), nullable=True),
        sa.Column("ativo", sa.Boolean(), nullable=False),
        _fk("politica_id", "classificacao_informacao", "politica_interna"),
        _fk("termo_id", "classificacao_informacao", "definicao"),
        sa.PrimaryKeyConstraint("id", name="pk_classificacao_informacao"),
    )


def downgrade() -> None:
    op.drop_table("classificacao_informacao")
    op.drop_table("regra_negocio")
    op.drop_table("lista_referencia")
    op.drop_table("definicao")
