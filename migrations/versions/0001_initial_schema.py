"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-18 12:00:00
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op

revision: str = "0001"
down_revision: str | None = None
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


def _fk(
    column: str, table: str, referred: str, ondelete: str | None = None
) -> sa.ForeignKeyConstraint:
    return sa.ForeignKeyConstraint(
        [column],
        [f"{referred}.id"],
        name=f"fk_{table}_{column}_{referred}",
        ondelete=ondelete,
    )


def upgrade() -> None:
    op.create_table(
        "usuario",
        *_base_columns(),
        sa.Column("nome", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("senha", sa.String(255), nullable=False),
        sa.Column("ativo", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_usuario"),
        sa.UniqueConstraint("email", name="uq_usuario_email"),
    )
    op.create_table(
        "sistema",
        *_base_columns(),
        sa.Column("nome", sa.String(255), nullable=False),
        sa.Column("descricao", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_sistema"),
        sa.UniqueConstraint("nome", name="uq_sistema_nome"),
    )
    op.create_table(
        "banco",
        *_base_columns(),
        sa.Column("nome", sa.String(255), nullable=False),
        sa.Column("descricao", sa.Text(), nullable=True),
        sa.Column("servidor", sa.String(255), nullable=True),
        sa.Column("porta", sa.Integer(), nullable=True),
        sa.Column("tipo", sa.String(100), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_banco"),
        sa.UniqueConstraint("nome", name="uq_banco_nome"),
    )
    op.create_table(
        "tipo_dados",
        *_base_columns(),
        sa.Column("nome", sa.String(255), nullable=False),
        sa.Column("descricao", sa.Text(), nullable=True),
        sa.Column("categoria", sa.String(ENUM_LENGTH), nullable=False),
        sa.Column("formato", sa.String(100), nullable=True),
        sa.Column("permite_nulo", sa.Boolean(), nullable=False),
        sa.Column("ativo", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_tipo_dados"),
        sa.UniqueConstraint("nome", name="uq_tipo_dados_nome"),
    )
    op.create_table(
        "politica_interna",
        *_base_columns(),
        sa.Column("nome", sa.String(255), nullable=False),
        sa.Column("descricao", sa.Text(), nullable=True),
        sa.Column("categoria", sa.String(100), nullable=True),
        sa.Column("objetivo", sa.Text(), nullable=True),
        sa.Column("escopo", sa.Text(), nullable=True),
        sa.Column("responsavel", sa.String(255), nullable=True),
        sa.Column("data_criacao", sa.DateTime(timezone=True), nullable=False),
        sa.Column("data_inicio_vigencia", sa.DateTime(timezone=True), nullable=False),
        sa.Column("data_termino", sa.DateTime(timezone=True), nullable=True),
        sa.Column("status", sa.String(ENUM_LENGTH), nullable=False),
        sa.Column("versao", sa.String(20), nullable=False),
        sa.Column("anexos_url", sa.String(500), nullable=True),
        sa.Column("relacionamento", sa.Text(), nullable=True),
        sa.Column("observacoes", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id", name="pk_politica_interna"),
    )
    op.create_table(
        "comunidade",
        *_base_columns(),
        sa.Column("nome", sa.String(255), nullable=False),
        sa.Column("descricao", sa.Text(), nullable=True),
        sa.Column("parent_id", sa.Uuid(), nullable=True),
        _fk("parent_id", "comunidade", "comunidade"),
        sa.PrimaryKeyConstraint("id", name="pk_comunidade"),
        sa.UniqueConstraint("nome", name="uq_comunidade_nome"),
    )
    op.create_table(
        "tabela",
        *_base_columns(),
        sa.Column("nome", sa.String(255), nullable=False),
        sa.Column("descricao", sa.Text(), nullable=True),
        sa.Column("banco_id", sa.Uuid(), nullable=True),
        sa.Column("sistema_id", sa.Uuid(), nullable=True),
        _fk("banco_id", "tabela", "banco"),
        _fk("sistema_id", "tabela", "sistema"),
        sa.PrimaryKeyConstraint("id", name="pk_tabela"),
    )
    op.create_table(
        "coluna",
        *_base_columns(),
        sa.Column("nome", sa.String(255), nullable=False),
        sa.Column("descricao", sa.Text(), nullable=True),
        sa.Column("obrigatorio", sa.Boolean(), nullable=False),
        sa.Column("unicidade", sa.Boolean(), nullable=False),
        sa.Column("ativo", sa.Boolean(), nullable=False),
        sa.Column("tabela_id", sa.Uuid(), nullable=False),
        sa.Column("tipo_dados_id", sa.Uuid(), nullable=True),
        sa.Column("politica_interna_id", sa.Uuid(), nullable=True),
        _fk("tabela_id", "coluna", "tabela"),
        _fk("tipo_dados_id", "coluna", "tipo_dados"),
        _fk("politica_interna_id", "coluna", "politica_interna"),
        sa.PrimaryKeyConstraint("id", name="pk_coluna"),
        sa.UniqueConstraint("tabela_id", "nome", name="uq_coluna_tabela_id"),
    )
    op.create_table(
        "processo",
        *_base_columns(),
        sa.Column("nome", sa.String(255), nullable=False),
        sa.Column("descricao", sa.Text(), nullable=True),
        sa.Column("comunidade_id", sa.Uuid(), nullable=False),
        _fk("comunidade_id", "processo", "comunidade"),
        sa.PrimaryKeyConstraint("id", name="pk_processo"),
    )
    op.create_table(
        "papel",
        *_base_columns(),
        sa.Column("nome", sa.String(255), nullable=False),
        sa.Column("descricao", sa.Text(), nullable=False),
        sa.Column("politica_id", sa.Uuid(), nullable=False),
        sa.Column("ativo", sa.Boolean(), nullable=False),
        _fk("politica_id", "papel", "politica_interna"),
        sa.PrimaryKeyConstraint("id", name="pk_papel"),
    )
    op.create_table(
        "atribuicao_papel_dominio",
        *_base_columns(),
        sa.Column("papel_id", sa.Uuid(), nullable=False),
        sa.Column("dominio_id", sa.Uuid(), nullable=False),
        sa.Column("tipo_entidade", sa.String(ENUM_LENGTH), nullable=False),
        sa.Column("documento_atribuicao", sa.String(500), nullable=True),
        sa.Column("onboarding", sa.Boolean(), nullable=False),
        sa.Column("data_inicio_vigencia", sa.DateTime(timezone=True), nullable=False),
        sa.Column("data_termino", sa.DateTime(timezone=True), nullable=True),
        sa.Column("observacoes", sa.Text(), nullable=True),
        _fk("papel_id", "atribuicao_papel_dominio", "papel"),
        _fk("dominio_id", "atribuicao_papel_dominio", "comunidade"),
        sa.PrimaryKeyConstraint("id", name="pk_atribuicao_papel_dominio"),
    )
    op.create_table(
        "dimensao_qualidade",
        *_base_columns(),
        sa.Column("nome", sa.String(255), nullable=False),
        sa.Column("descricao", sa.Text(), nullable=True),
        sa.Column("politica_id", sa.Uuid(), nullable=False),
        _fk("politica_id", "dimensao_qualidade", "politica_interna"),
        sa.PrimaryKeyConstraint("id", name="pk_dimensao_qualidade"),
    )
    op.create_table(
        "regra_qualidade",
        *_base_columns(),
        sa.Column("descricao", sa.Text(), nullable=False),
        sa.Column("dimensao_id", sa.Uuid(), nullable=False),
        sa.Column("tabela_id", sa.Uuid(), nullable=True),
        sa.Column("coluna_id", sa.Uuid(), nullable=True),
        sa.Column("responsavel_id", sa.Uuid(), nullable=False),
        _fk("dimensao_id", "regra_qualidade", "dimensao_qualidade"),
        _fk("tabela_id", "regra_qualidade", "tabela"),
        _fk("coluna_id", "regra_qualidade", "coluna"),
        _fk("responsavel_id", "regra_qualidade", "usuario"),
        sa.PrimaryKeyConstraint("id", name="pk_regra_qualidade"),
    )
    op.create_table(
        "log_auditoria",
        *_base_columns(),
        sa.Column("entidade", sa.String(100), nullable=False),
        sa.Column("entidade_id", sa.String(64), nullable=False),
        sa.Column("operacao", sa.String(ENUM_LENGTH), nullable=False),
        sa.Column(
            "timestamp", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False
        ),
        sa.Column("dados_antes", sa.Text(), nullable=True),
        sa.Column("dados_depois", sa.Text(), nullable=True),
        sa.Column("usuario_id", sa.Uuid(), nullable=True),
        _fk("usuario_id", "log_auditoria", "usuario", ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id", name="pk_log_auditoria"),
    )
    for column in ("entidade", "entidade_id", "timestamp"):
        op.create_index(f"ix_log_auditoria_{column}", "log_auditoria", [column])
    op.create_table(
        "configuracao_mfa",
        *_base_columns(),
        sa.Column("usuario_id", sa.Uuid(), nullable=False),
        sa.Column("tipo", sa.String(ENUM_LENGTH), nullable=False),
        sa.Column("telefone", sa.String(20), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("secret_key", sa.String(128), nullable=True),
        sa.Column("ativo", sa.Boolean(), nullable=False),
        sa.Column("ativado_em", sa.DateTime(timezone=True), nullable=True),
        sa.Column("desativado_em", sa.DateTime(timezone=True), nullable=True),
        sa.Column("ultima_verificacao", sa.DateTime(timezone=True), nullable=True),
        _fk("usuario_id", "configuracao_mfa", "usuario", ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id", name="pk_configuracao_mfa"),
    )
    op.create_table(
        "codigo_mfa",
        *_base_columns(),
        sa.Column("configuracao_id", sa.Uuid(), nullable=False),
        sa.Column("codigo", sa.String(16), nullable=False),
        sa.Column("tipo", sa.String(ENUM_LENGTH), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("usado", sa.Boolean(), nullable=False),
        _fk("configuracao_id", "codigo_mfa", "configuracao_mfa", ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id", name="pk_codigo_mfa"),
    )


def downgrade() -> None:
    op.drop_table("codigo_mfa")
    op.drop_table("configuracao_mfa")
    for column in ("timestamp", "entidade_id", "entidade"):
        op.drop_index(f"ix_log_auditoria_{column}", table_name="log_auditoria")
    op.drop_table("log_auditoria")
    op.drop_table("regra_qualidade")
    op.drop_table("dimensao_qualidade")
    op.drop_table("atribuicao_papel_dominio")
    op.drop_table("papel")
    op.drop_table("processo")
    op.drop_table("coluna")
    op.drop_table("tabela")
    op.drop_table("comunidade")
    op.drop_table("politica_interna")
    op.drop_table("tipo_dados")
    op.drop_table("banco")
    op.drop_table("sistema")
    op.drop_table("usuario")
