from typing import Any, Dict, Generic, Optional, Type, TypeVar, Union

from pydantic import BaseModel
from sqlalchemy.orm import Session

from pilates_api.db.base_class import Base

ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=BaseModel)


class BaseRepository(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    def __init__(self, model: Type[ModelType]):
        """
        Repository con operaciones CRUD por defecto.
        """
        self.model = model

    def get(self, db: Session, id: Any) -> Optional[ModelType]:
        """
        Obtener un objeto por su ID.

        Args:
            db: Sesión de base de datos
            id: ID del objeto a obtener

        Returns:
            El objeto solicitado o None si no existe
        """
        return db.get(self.model, id)

    def create(
        self, db: Session, *, obj_in: Union[CreateSchemaType, Dict[str, Any]], commit: bool = True
    ) -> ModelType:
        """
        Crear un nuevo registro.

        Args:
            db: Sesión de base de datos
            obj_in: Datos del objeto a crear (schema o diccionario con nombres de columna)
            commit: Si es False solo se hace flush, para agrupar varias operaciones en una transacción

        Returns:
            El objeto creado
        """
        if isinstance(obj_in, dict):
            obj_in_data = dict(obj_in)
        else:
            obj_in_data = obj_in.model_dump()

        db_obj = self.model(**obj_in_data)
        db.add(db_obj)
        self._persist(db, db_obj, commit)
        return db_obj

    def update(
        self,
        db: Session,
        *,
        db_obj: ModelType,
        obj_in: Union[UpdateSchemaType, Dict[str, Any]],
        commit: bool = True
    ) -> ModelType:
        """
        Actualizar un registro existente.

        Solo se modifican los campos presentes en obj_in (exclude_unset para schemas).
        """
        if isinstance(obj_in, dict):
            update_data = obj_in
        else:
            update_data = obj_in.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)
        db.add(db_obj)
        self._persist(db, db_obj, commit)
        return db_obj

    def remove(self, db: Session, *, id: int) -> ModelType:
        """
        Eliminar un registro.

        Raises:
            ValueError: Si el objeto no existe
        """
        obj = self.get(db, id=id)
        if not obj:
            raise ValueError(f"Objeto con ID {id} no encontrado")

        db.delete(obj)
        db.commit()
        return obj

    def exists(self, db: Session, id: int) -> bool:
        """
        Verificar si un objeto existe.
        """
        query = db.query(self.model.id).filter(self.model.id == id)
        return db.query(query.exists()).scalar()

    @staticmethod
    def _persist(db: Session, db_obj: ModelType, commit: bool) -> None:
        if commit:
            db.commit()
            db.refresh(db_obj)
        else:
            db.flush()
