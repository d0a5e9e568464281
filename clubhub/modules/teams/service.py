from supabase import Client
from clubhub.modules.teams.schemas import TeamCreate, TeamUpdate, TeamResponse
from clubhub.database.supabase_client import row_or_none, rows
from typing import List
from fastapi import HTTPException


class TeamService:
    def __init__(self, supabase: Client):
        self.supabase = supabase

    def list_teams(self) -> List[TeamResponse]:
        """List all teams by name"""
        try:
            result = self.supabase.table("teams").select("*").order("team_name").execute()
            return [TeamResponse(**team) for team in rows(result)]
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def create_team(self, team_data: TeamCreate) -> TeamResponse:
        """Create a team"""
        try:
            result = self.supabase.table("teams").insert(team_data.model_dump()).execute()
            team = row_or_none(result)
            if not team:
                raise HTTPException(status_code=500, detail="Failed to create team")
            return TeamResponse(**team)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def update_team(self, team_id: str, team_data: TeamUpdate) -> TeamResponse:
        """Update team"""
        update_data = team_data.model_dump(exclude_unset=True)
        if not update_data:
            raise HTTPException(status_code=400, detail="No fields to update")
        try:
            result = self.supabase.table("teams").update(update_data).eq("id", team_id).execute()
            team = row_or_none(result)
            if not team:
                raise HTTPException(status_code=404, detail="Team not found")
            return TeamResponse(**team)
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))

    def delete_team(self, team_id: str) -> None:
        try:
            result = self.supabase.table("teams").delete().eq("id", team_id).execute()
            if not rows(result):
                raise HTTPException(status_code=404, detail="Team not found")
        except HTTPException:
            raise
        except Exception as e:
            raise HTTPException(status_code=500, detail=str(e))
