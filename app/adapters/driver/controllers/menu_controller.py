from dataclasses import asdict
from typing import Optional
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field
from infra import container
from app.domain.errors import MenuItemNotFound

router = APIRouter(prefix="/menu")

_menu = container.menu_service

class MenuCreatePayload(BaseModel):
    titulo: str = Field(..., min_length=1, description="Nome do platillo")
    ingredientes: str = Field(..., min_length=1)
    preparacion: str = Field(..., min_length=1)
    imagen: Optional[str] = Field(None, description="URL da imagem já hospedada")

class MenuUpdatePayload(BaseModel):
    titulo: Optional[str] = None
    ingredientes: Optional[str] = None
    preparacion: Optional[str] = None
    imagen: Optional[str] = None

@router.get("")
def get_menu():
    return {"message": "Menús obtidos com sucesso", "data": [asdict(i) for i in _menu.list()]}

@router.post("", status_code=201)
async def create_menu(p: MenuCreatePayload):
    item = await _menu.create(p.titulo, p.ingredientes, p.preparacion, p.imagen)
    return {"message": "Platillo adicionado com sucesso", "data": {"action": "create", **asdict(item)}}

@router.put("/{item_id}")
async def update_menu(item_id: int, p: MenuUpdatePayload):
    try:
        item = await _menu.update(item_id, **p.model_dump())
    except MenuItemNotFound as e:
        raise HTTPException(404, str(e))
    return {"message": "Platillo atualizado com sucesso", "data": {"action": "update", **asdict(item)}}

@router.delete("/{item_id}")
def delete_menu(item_id: int):
    try:
        _menu.delete(item_id)
    except MenuItemNotFound as e:
        raise HTTPException(404, str(e))
    return {"message": "Platillo removido com sucesso"}
