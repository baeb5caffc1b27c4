"""
Direct messaging endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.deps import get_storage, get_actor
from app.core.actor import Actor
from app.schemas.message import MessageCreate, MessageResponse, ConversationResponse, UnreadCountResponse
from app.storage import Storage

router = APIRouter(tags=["Messages"])


@router.get("/conversations", response_model=list[ConversationResponse])
async def list_conversations(actor: Actor = Depends(get_actor), storage: Storage = Depends(get_storage)):
    """The caller's conversations, most recent first, with the last message of each."""
    return await storage.get_user_conversations(actor.user_id)


@router.get("/messages/unread-count", response_model=UnreadCountResponse)
async def unread_count(actor: Actor = Depends(get_actor), storage: Storage = Depends(get_storage)):
    return UnreadCountResponse(unread=await storage.count_unread_messages(actor.user_id))


@router.get("/messages/{user_id}", response_model=list[MessageResponse])
async def conversation_messages(
    user_id: str,
    actor: Actor = Depends(get_actor),
    storage: Storage = Depends(get_storage),
):
    return await storage.get_messages(actor.user_id, user_id)


@router.post("/messages", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def send_message(
    data: MessageCreate,
    actor: Actor = Depends(get_actor),
    storage: Storage = Depends(get_storage),
):
    if data.receiver_id == actor.user_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Cannot message yourself")
    if await storage.get_user(data.receiver_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Recipient not found")
    return await storage.send_message(actor, data.receiver_id, data.content)


@router.patch("/messages/{message_id}/read", status_code=status.HTTP_204_NO_CONTENT)
async def mark_read(
    message_id: str,
    actor: Actor = Depends(get_actor),
    storage: Storage = Depends(get_storage),
):
    """Mark a received message as read. Unknown ids succeed silently."""
    message = await storage.get_message(message_id)
    if message is not None and message.receiver_id != actor.user_id and not actor.is_admin:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Only the recipient can mark a message read")
    await storage.mark_message_as_read(actor, message_id)
