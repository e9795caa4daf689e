from __future__ import annotations


class DomainError(Exception):
    """Base para erros de dominio."""


class PumpPoolsInputError(DomainError):
    """Parametros invalidos para listagem de pools pump.fun."""


class PumpPoolsUnavailableError(DomainError):
    """Upstream indisponivel e nenhum payload em cache para servir."""


class MarketDataUnavailableError(DomainError):
    """Nao foi possivel obter dados de mercado nem servir cache."""


class UpstreamUnavailableError(DomainError):
    """Fonte externa de dados falhou apos todas as tentativas."""
