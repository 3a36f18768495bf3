from examcell.infrastructure.persistence.di import PersistenceProvider

__all__ = ["PersistenceProvider"]
