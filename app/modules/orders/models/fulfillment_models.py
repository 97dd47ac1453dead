# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/models/fulfillment_models.py

Servicios aprovisionados (services) y sus tareas (tasks).

Se crean únicamente por la rutina de aprovisionamiento; las tareas son un
snapshot de default_tasks del template en ese momento.

Autor: Agency Hub
Fecha: 2026-09-03
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional
from uuid import uuid4

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.shared.database.base import Base, as_str_enum
from app.modules.orders.enums import ServiceStatus, TaskPriority, TaskStatus
from app.modules.orders.utils import utcnow


class Service(Base):
    __tablename__ = "services"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=lambda: str(uuid4()))

    order_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True
    )
    template_id: Mapped[str] = mapped_column(String(64), ForeignKey("service_templates.id"), nullable=False)
    client_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[ServiceStatus] = mapped_column(
        as_str_enum(ServiceStatus, name="service_status"),
        nullable=False,
        default=ServiceStatus.TO_DO,
    )

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    tasks: Mapped[List["Task"]] = relationship(
        "Task",
        back_populates="service",
        lazy="selectin",
        order_by="Task.sort_order",
        cascade="all, delete-orphan",
    )


class Task(Base):
    __tablename__ = "tasks"

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=lambda: str(uuid4()))

    service_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("services.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    status: Mapped[TaskStatus] = mapped_column(
        as_str_enum(TaskStatus, name="task_status"),
        nullable=False,
        default=TaskStatus.TO_DO,
    )
    priority: Mapped[TaskPriority] = mapped_column(
        as_str_enum(TaskPriority, name="task_priority"),
        nullable=False,
        default=TaskPriority.MEDIUM,
    )
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, default=utcnow)

    service: Mapped["Service"] = relationship("Service", back_populates="tasks")


__all__ = ["Service", "Task"]
